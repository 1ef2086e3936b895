"""Core auth, authorization and ordering primitives."""
