"""Card renderer adapters."""
