"""Currency, amount, price and percent value types."""
