"""Host adapters embedding the engine in concrete UI toolkits."""
