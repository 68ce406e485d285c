#! /usr/bin/env python3

"""
Text and color helpers shared by the playback engine and the render panes.
"""

__all__ = ["splitLines", "lineStartOffsets", "offsetAt", "charByteRanges",
           "distanceOpacity", "blendColor"]

# Lines beyond this distance from the cursor are drawn with minimum opacity
FADE_DISTANCE = 20
FADE_FLOOR = 0.5


##
## Split text into lines without terminators. A trailing newline does not
## produce an extra empty line, so "a\nb\n" and "a\nb" both give ["a", "b"].
##
## @param string text Text to split
## @return list Lines
##
def splitLines(text):
    if text == "":
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


##
## Byte offsets of the start of every line in the UTF-8 encoding of text.
## Line 0 always starts at 0, the table has one entry per line and is
## strictly increasing.
##
## @param string text Source text
## @return tuple Line start offsets
##
def lineStartOffsets(text):
    data = text.encode("utf-8")
    offsets = [0]
    position = data.find(b"\n")
    while position != -1 and position + 1 < len(data):
        offsets.append(position + 1)
        position = data.find(b"\n", position + 1)
    return tuple(offsets)


##
## Clamped lookup into a line offset table: indices past the end fall back
## to the last known offset, negative indices to the first one.
##
def offsetAt(offsets, index):
    if not offsets:
        return 0
    if index < 0:
        return offsets[0]
    if index >= len(offsets):
        return offsets[-1]
    return offsets[index]


##
## Yield (character, byte start, byte end) for every character of a line
## starting at the absolute byte offset base.
##
def charByteRanges(line, base=0):
    position = base
    for char in line:
        width = len(char.encode("utf-8"))
        yield char, position, position + width
        position += width


def distanceOpacity(distance):
    distance = abs(distance)
    if distance == 0:
        return 1.0
    return 1.0 - min(distance, FADE_DISTANCE) / FADE_DISTANCE * (1.0 - FADE_FLOOR)


##
## Blend a foreground over a background color.
##
## @param tuple fg Foreground (r, g, b)
## @param tuple bg Background (r, g, b)
## @param float opacity Foreground opacity in [0, 1]
## @return tuple Blended (r, g, b), channels truncated to int
##
def blendColor(fg, bg, opacity):
    return tuple(int(f * opacity + b * (1.0 - opacity)) for f, b in zip(fg, bg))
