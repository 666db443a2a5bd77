"""
The MODEL layer contains pure data structures.
It has NO knowledge of the kernels or of how positions are rendered.
It deals with node records, the dependency graph, tunables and layout state.
"""
