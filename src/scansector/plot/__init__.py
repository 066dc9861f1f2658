"""Plot geometry and marker drawing for the system view."""
