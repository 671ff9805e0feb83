"""Command line front end for pqcbind."""
