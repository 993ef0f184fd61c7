"""pandera schemas and validators for raw sales rows."""
