"""
MIT License

Copyright (c) 2020-24 PyKOB - MorseKOB in Python

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""

"""
codetable module

The Morse code table shared by the decoder and the encoder.

The table is a dichotomic search table: a complete binary tree stored in a
flat string and addressed with 1-based positions. The root, position 64, is
the word space. From any node a dot moves `jump` positions toward the start
of the table and a dash moves `jump` positions toward the end, where `jump`
is 32 below the root and halves at each level:

    E = 64 - 32 = 32        T = 64 + 32 = 96
    I = 32 - 16 = 16        A = 32 + 16 = 48    N = 96 - 16 = 80 ...

Walking away from the root decodes a character, walking toward the root
encodes one. The tree has 6 levels, so 2*63+1 = 127 positions.
"""

TREETOP     = 64                # position of the root (word space)
TOPJUMP     = TREETOP // 2      # first step away from the root
LEVELS      = 6                 # maximum number of dots and dashes in a character
TABLE_LEN   = 2 * TREETOP - 1

NOCHAR      = '*'               # position with no character assigned
ERRORCHAR   = '#'               # reported by the decoder for a malformed character
WORDSPACE   = ' '

# ITU Morse with punctuation, no non-english extensions.
# '!' is in the table twice: -.-.-- (KW digraph) and ---. (MN digraph).
ITU_TABLE = (
    '*5*H*4*S***V*3*I***F***U?*_**2*E***L"**R*+.****A***P@**W***J\'1* *6-B*=*D*/'
    '*X***N***C;*!K*()Y***T*7*Z**,G***Q***M:8*!***O*9***0*'
)


class NotFound(LookupError):
    """The character is not in the Morse table."""


def _check(position):
    if not 1 <= position <= TABLE_LEN:
        raise ValueError("Morse table position {} is not in 1..{}".format(position, TABLE_LEN))

def _step(position):
    # Lowest set bit: the distance between a node and its parent.
    return position & -position

def level_of(position) -> int:
    """Tree level of a position: 0 for the root, 6 for a leaf."""
    _check(position)
    return LEVELS - (_step(position).bit_length() - 1)

def is_dot(position) -> bool:
    """True if the position is reached from its parent with a dot."""
    _check(position)
    step = _step(position)
    return (position // step) % 4 == 1

def parent(position):
    """Position one level closer to the root, or `None` for the root."""
    _check(position)
    if position == TREETOP:
        return None
    step = _step(position)
    return position + step if is_dot(position) else position - step

def dot_child(position):
    """Position reached with a dot, or `None` below a leaf."""
    _check(position)
    jump = _step(position) // 2
    return position - jump if jump else None

def dash_child(position):
    """Position reached with a dash, or `None` below a leaf."""
    _check(position)
    jump = _step(position) // 2
    return position + jump if jump else None

def path_to(position) -> str:
    """
    The dots and dashes leading from the root to a position.

    Traced from the position up to the root and then reversed. The root
    itself has an empty path.
    """
    code = []
    p = position
    while p != TREETOP:
        code.append('.' if is_dot(p) else '-')
        p = parent(p)
    return ''.join(reversed(code))


class CodeTable:
    """
    Read-only lookups over a dichotomic Morse table.
    """

    def __init__(self, table=ITU_TABLE):
        if len(table) != TABLE_LEN:
            raise ValueError("Morse table must have {} entries, not {}".format(TABLE_LEN, len(table)))
        if table[TREETOP - 1] != WORDSPACE:
            raise ValueError("Morse table root must be the word space")
        self._table = table
        self._positions = {}
        for i, c in enumerate(table):
            if c != NOCHAR and c not in self._positions:
                self._positions[c] = i + 1  # first occurrence is the one that is sent

    def __len__(self):
        return len(self._table)

    def __contains__(self, char):
        return char in self._positions

    def character_at(self, position) -> str:
        """
        The character at a (1-based) position, or `NOCHAR` if there is none.
        """
        if 1 <= position <= TABLE_LEN:
            return self._table[position - 1]
        return NOCHAR

    def lookup_position_of(self, char) -> int:
        """
        The (1-based) position of a character. Raises `NotFound` if the
        character is not in the table.
        """
        try:
            return self._positions[char]
        except KeyError:
            raise NotFound(char) from None

    def characters(self) -> str:
        """All of the characters in the table, word space included."""
        return ''.join(self._positions)

    def code_of(self, char) -> str:
        """The dots and dashes for a character ('' for the word space)."""
        return path_to(self.lookup_position_of(char))

    def character_of(self, code) -> str:
        """The character for a string of dots and dashes, or `NOCHAR`."""
        p = TREETOP
        for e in code:
            if e == '.':
                p = dot_child(p)
            elif e == '-':
                p = dash_child(p)
            else:
                return NOCHAR
            if p is None:
                return NOCHAR
        return self.character_at(p)


morse_table = CodeTable()
