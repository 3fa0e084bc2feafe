"""Framework-independent access-control core (tables, claims, evaluation)."""
