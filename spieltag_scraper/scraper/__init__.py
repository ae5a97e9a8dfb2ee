"""Page loading, fixture location and field extraction."""
