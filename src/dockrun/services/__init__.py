"""Services for dockrun."""
