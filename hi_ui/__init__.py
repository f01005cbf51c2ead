"""Console front-end for the handover inventory."""
