"""Detailed statistics, hole statistics, year trends and chart shaping."""
