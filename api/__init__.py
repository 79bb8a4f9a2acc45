"""HTTP API for pitch bookings and the match calendar feed."""
