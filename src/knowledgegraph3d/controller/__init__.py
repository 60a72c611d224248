"""
The CONTROLLER layer advances the view transform over time and turns pointer
input into selections. It owns no widgets; the view layer wires it to Qt.
"""
