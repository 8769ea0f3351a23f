"""Read-only tools exposed over MCP. Each takes the client as first parameter."""
