"""
The VIEW boundary exposes read-only layout data to renderers.
Nothing in here draws; shapes, text and cameras belong to the host.
"""
