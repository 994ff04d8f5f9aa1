"""Inkwell: a small blog authoring API and its async editor client."""
