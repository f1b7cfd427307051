"""Client-side controller for the Hardware-as-a-Service project workspace."""
