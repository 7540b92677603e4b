"""HTTP host for the digest engine."""
