"""Settings, logging, security and error mapping."""
