"""Infrastructure layer: IO and integration with the prediction backend."""
