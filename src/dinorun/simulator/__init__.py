"""Desktop window and input mapping."""
