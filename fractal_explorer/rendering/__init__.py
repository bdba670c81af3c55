"""Colors, drawing surfaces, renderers and image export."""
