"""knowgraph command line interface."""
