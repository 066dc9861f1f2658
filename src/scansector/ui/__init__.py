"""UI widgets drawn with pygame: buttons, text input, lists, legend, HUD."""
