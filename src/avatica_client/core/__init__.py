"""Protocol and session layer for the Avatica client."""
