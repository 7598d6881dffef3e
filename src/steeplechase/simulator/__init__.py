"""Desktop simulator for Steeplechase."""
