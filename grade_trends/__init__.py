"""Cumulative grade trends for a set of classes."""
