"""dboxpy command line interface."""
