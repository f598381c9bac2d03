"""Chat front-end for the ctx persistent-context CLI."""
