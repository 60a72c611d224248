"""
The MODEL layer contains pure data structures and the projection math.
It has NO knowledge of the GUI widgets or of how a frame is painted.
It deals with the graph, the view transform, colors and JSON loading.
"""
