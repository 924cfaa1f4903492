"""Real-time transport: Socket.IO server and broadcaster."""
