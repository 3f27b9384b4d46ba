"""Models shared between the pool reader service and its clients."""
