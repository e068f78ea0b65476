"""HTTP and websocket API surface."""
