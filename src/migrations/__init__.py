"""One-off content migrations from the previous WordPress site."""
