"""Loading of sales records from source files."""
