"""Commands registered on the synapse-env group."""
