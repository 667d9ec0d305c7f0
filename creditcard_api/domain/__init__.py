"""Domain helpers that do not touch storage (card number rules)."""
