"""Desktop pygame front end for Retro Runner."""
