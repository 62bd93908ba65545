"""Pure domain rules (targets, bans) shared by the repository."""
