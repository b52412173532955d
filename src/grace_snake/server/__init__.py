"""Network host that drives game sessions over HTTP and WebSockets."""
