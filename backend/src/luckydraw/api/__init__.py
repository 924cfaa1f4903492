"""HTTP and Socket.IO API layer."""
