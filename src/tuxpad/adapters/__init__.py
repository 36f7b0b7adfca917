"""Host integrations that feed keys into the editor and paint its state."""
