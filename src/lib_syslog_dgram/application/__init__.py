"""Application layer: ports and use cases for formatting and delivery."""
