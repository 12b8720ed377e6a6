"""Interactive Dash map for track ray correlation."""
