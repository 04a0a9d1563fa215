"""Foundation: configuration, errors and shared types."""
