"""Per-account gacha pull history analytics."""
