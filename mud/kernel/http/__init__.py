"""HTTP helpers shared by the API surface."""
