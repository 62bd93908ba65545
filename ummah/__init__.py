"""File-backed persistence layer for the Ummah social platform."""
