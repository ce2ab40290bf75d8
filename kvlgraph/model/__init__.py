"""Host-side model of grid processes and the links that connect them."""
