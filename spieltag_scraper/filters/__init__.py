"""Static keyword tables for teams and broadcasters."""
