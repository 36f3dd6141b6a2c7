"""Transit route matching: single rides and two-route transfers."""
