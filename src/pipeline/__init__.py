"""Batch pipeline and its event stream."""
