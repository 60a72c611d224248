"""
The VIEW layer paints frames with QPainter and hosts the Qt widgets.
"""
