"""adcloak command line interface."""
