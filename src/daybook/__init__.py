"""daybook - one journal per day."""
