"""
Tests for the core knowgraph modules.
"""
