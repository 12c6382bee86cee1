"""Product catalog service fronted by configurable latency and error injection."""
