"""Deploy detail resolution for publishing build artifacts to binary repositories."""
