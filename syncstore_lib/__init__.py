"""File-synchronized key-value stores."""
