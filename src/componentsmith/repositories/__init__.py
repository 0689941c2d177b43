"""Storage for versions and generated components."""
