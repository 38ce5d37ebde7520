"""Order-insensitive differencing of flattened JSON-LD graphs."""
