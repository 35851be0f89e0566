"""Scalar statistics and the Handicap Index."""
