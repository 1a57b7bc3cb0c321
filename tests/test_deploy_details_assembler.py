from pathlib import Path

import pytest

from artifactdeploy.modules.deploydetails.domain import (
    ArtifactDescriptor,
    ArtifactFileMissing,
    PackageType,
    ProjectCoordinates,
    PublishArtifactInfo,
    PublisherConfig,
    RepositoryConfigurationMissing,
    TemplateSubstitutionError,
)
from artifactdeploy.modules.deploydetails.properties import ArtifactSpecs, PropertySpec
from artifactdeploy.modules.deploydetails.service import DeployDetailSink, DeployDetailsAssembler

PROJECT = ProjectCoordinates(group="com.example", name="mylib", version="1.0")


def write_artifact(tmp_path: Path, filename: str, content: bytes = b"jar-bytes") -> Path:
    path = tmp_path / filename
    path.write_bytes(content)
    return path


def make_config(**overrides) -> PublisherConfig:
    values = {"repo_key": "gen-repo", "release_repo_key": "rel-repo", "snapshot_repo_key": "snap-repo"}
    values.update(overrides)
    return PublisherConfig(**values)


def test_build_single_artifact(tmp_path):
    jar = write_artifact(tmp_path, "mylib-1.0.jar")
    [artifact] = PROJECT.descriptors_for_configuration(
        "archives", [PublishArtifactInfo(name="mylib", extension="jar", type="jar", file=jar)]
    )
    specs = ArtifactSpecs([PropertySpec.of({"team": "core"}, configuration="archives")])
    assembler = DeployDetailsAssembler(make_config(), specs, {"build.number": "42"})

    detail = assembler.build(artifact)

    assert detail.artifact_path == "com/example/mylib/1.0/mylib-1.0.jar"
    assert detail.target_repository == "rel-repo"
    assert detail.file == jar
    assert len(detail.checksums.as_dict()) == 3
    assert dict(detail.properties) == {"build.number": "42", "team": "core"}
    assert detail.package_type is PackageType.GRADLE
    assert assembler.sink.snapshot() == [detail]


def test_detail_properties_are_read_only(tmp_path):
    jar = write_artifact(tmp_path, "mylib-1.0.jar")
    [artifact] = PROJECT.descriptors_for_configuration(
        "archives", [PublishArtifactInfo(name="mylib", extension="jar", type="jar", file=jar)]
    )
    detail = DeployDetailsAssembler(make_config()).build(artifact)

    with pytest.raises(TypeError):
        detail.properties["new"] = "value"


def test_snapshot_version_routes_to_snapshot_repo(tmp_path):
    jar = write_artifact(tmp_path, "mylib-1.0-SNAPSHOT.jar")
    project = ProjectCoordinates(group="com.example", name="mylib", version="1.0-SNAPSHOT")
    [artifact] = project.descriptors_for_configuration(
        "mavenJava", [PublishArtifactInfo(name="mylib", extension="jar", type="jar", file=jar, classifier="sources")]
    )

    detail = DeployDetailsAssembler(make_config()).build(artifact)

    assert detail.target_repository == "snap-repo"
    assert detail.artifact_path == "com/example/mylib/1.0-SNAPSHOT/mylib-1.0-SNAPSHOT-sources.jar"


def test_missing_file_raises_and_appends_nothing(tmp_path):
    [artifact] = PROJECT.descriptors_for_configuration(
        "archives", [PublishArtifactInfo(name="mylib", extension="jar", type="jar", file=tmp_path / "nope.jar")]
    )
    assembler = DeployDetailsAssembler(make_config())

    with pytest.raises(ArtifactFileMissing) as info:
        assembler.build(artifact)

    assert info.value.publication == "archives"
    assert info.value.artifact == artifact.display_name
    assert len(assembler.sink) == 0


def test_missing_repository_configuration(tmp_path):
    jar = write_artifact(tmp_path, "mylib-1.0.jar")
    [artifact] = PROJECT.descriptors_for_configuration(
        "archives", [PublishArtifactInfo(name="mylib", extension="jar", type="jar", file=jar)]
    )

    with pytest.raises(RepositoryConfigurationMissing):
        DeployDetailsAssembler(PublisherConfig()).build(artifact)


def test_unresolved_tokens_rejected(tmp_path):
    jar = write_artifact(tmp_path, "mylib-1.0.jar")
    [artifact] = PROJECT.descriptors_for_configuration(
        "archives", [PublishArtifactInfo(name="mylib", extension="jar", type="jar", file=jar)]
    )
    config = make_config(artifact_pattern="[organisation]/[branch]/[artifact].[ext]")

    with pytest.raises(TemplateSubstitutionError) as info:
        DeployDetailsAssembler(config).build(artifact)

    assert "branch" in str(info.value)


def test_empty_path_rejected(tmp_path):
    jar = write_artifact(tmp_path, "mylib-1.0.jar")
    [artifact] = PROJECT.descriptors_for_configuration(
        "archives", [PublishArtifactInfo(name="mylib", extension="jar", type="jar", file=jar)]
    )

    with pytest.raises(TemplateSubstitutionError):
        DeployDetailsAssembler(make_config(artifact_pattern="([classifier])")).build(artifact)


def test_batch_continues_past_missing_file(tmp_path):
    infos = [
        PublishArtifactInfo(name="mylib", extension="jar", type="jar", file=write_artifact(tmp_path, "mylib-1.0.jar")),
        PublishArtifactInfo(name="mylib", extension="pom", type="pom", file=tmp_path / "missing.pom"),
        PublishArtifactInfo(
            name="mylib", extension="jar", type="jar", classifier="sources",
            file=write_artifact(tmp_path, "mylib-1.0-sources.jar"),
        ),
    ]
    artifacts = PROJECT.descriptors_for_configuration("mavenJava", infos)
    assembler = DeployDetailsAssembler(make_config(), workers=1)

    outcome = assembler.assemble(artifacts)

    assert not outcome.ok
    assert [d.artifact_path for d in outcome.details] == [
        "com/example/mylib/1.0/mylib-1.0.jar",
        "com/example/mylib/1.0/mylib-1.0-sources.jar",
    ]
    assert len(outcome.failures) == 1
    assert isinstance(outcome.failures[0].error, ArtifactFileMissing)
    assert outcome.failures[0].artifact.extension == "pom"
    assert len(assembler.sink) == 2
    with pytest.raises(ArtifactFileMissing):
        outcome.raise_first()


@pytest.mark.parametrize("workers", [1, 4])
def test_batch_of_n_yields_n_details_in_input_order(tmp_path, workers):
    infos = [
        PublishArtifactInfo(
            name=f"part{i}", extension="jar", type="jar",
            file=write_artifact(tmp_path, f"part{i}.jar", content=str(i).encode()),
        )
        for i in range(12)
    ]
    artifacts = PROJECT.descriptors_for_configuration("archives", infos)

    outcome = DeployDetailsAssembler(make_config(), workers=workers).assemble(artifacts)

    assert outcome.ok
    assert len(outcome.details) == 12
    assert [d.artifact.name for d in outcome.details] == [f"part{i}" for i in range(12)]


def test_same_file_in_two_publications_yields_two_details(tmp_path):
    jar = write_artifact(tmp_path, "mylib-1.0.jar")
    info = PublishArtifactInfo(name="mylib", extension="jar", type="jar", file=jar)
    artifacts = PROJECT.descriptors_for_configuration("archives", [info]) + PROJECT.descriptors_for_configuration(
        "mavenJava", [info]
    )
    sink = DeployDetailSink()

    DeployDetailsAssembler(make_config(), sink=sink).assemble(artifacts)

    assert [d.artifact.publication for d in sink] == ["archives", "mavenJava"]
    assert sink.snapshot()[0].artifact_path == sink.snapshot()[1].artifact_path


def test_shared_sink_grows_across_batches(tmp_path):
    jar = write_artifact(tmp_path, "mylib-1.0.jar")
    artifacts = PROJECT.descriptors_for_configuration(
        "archives", [PublishArtifactInfo(name="mylib", extension="jar", type="jar", file=jar)]
    )
    sink = DeployDetailSink()
    assembler = DeployDetailsAssembler(make_config(), sink=sink)

    assembler.assemble(artifacts)
    assembler.assemble(artifacts)

    assert len(sink) == 2


def test_descriptor_display_name():
    artifact = ArtifactDescriptor(
        name="mylib", extension="jar", type="jar", group="com.example", module="mylib",
        version="1.0", file=Path("x.jar"), publication="archives", classifier="doc",
    )
    assert artifact.display_name == "com.example:mylib:1.0:mylib-doc.jar"


def test_directory_artifact_fails_with_context(tmp_path):
    folder = tmp_path / "mylib-1.0.jar"
    folder.mkdir()
    [artifact] = PROJECT.descriptors_for_configuration(
        "archives", [PublishArtifactInfo(name="mylib", extension="jar", type="jar", file=folder)]
    )

    with pytest.raises(ArtifactFileMissing) as info:
        DeployDetailsAssembler(make_config()).build(artifact)

    assert "not a regular file" in str(info.value)
    assert info.value.artifact == artifact.display_name
    assert info.value.publication == "archives"
