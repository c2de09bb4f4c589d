"""Kill/loss notification bot for EVE Online corporations."""
