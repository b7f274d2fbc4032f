"""Identity: usuarios, roles, passwords y JWT."""
