"""Host adapters that drive an editing session."""
