"""Adapters binding the domain ports to GitHub, the ``wgc`` CLI and the Actions runner."""
