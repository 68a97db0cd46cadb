"""
End-to-end transformations: text → acceptor → composition → best path → text.
"""
from pathlib import Path

from textfst.compose import CompositionMismatch
from textfst.decode import decode
from textfst.fst import FST
from textfst.rules import case_digit_converter, reversal
from textfst.symbols import SymbolTable


CONVERTER_FILE = 'converter.fst'
ISYMBOLS_FILE = 'isyms.txt'
OSYMBOLS_FILE = 'osyms.txt'
REVERSAL_FILE = 'reverse_user.fst'
REVERSAL_SYMBOLS_FILE = 'reverse_syms.txt'


class Converter:
    """
    Case/digit/space conversion with its own pair of symbol tables.

    >>> Converter()('a1 b')
    'A one B'
    """

    def __init__(self, isymbols=None, osymbols=None, fst=None):
        if fst is None:
            self.isymbols = SymbolTable('isymbols')
            self.osymbols = SymbolTable('osymbols')
            self.fst = case_digit_converter(self.isymbols, self.osymbols)
        else:
            self.isymbols = isymbols
            self.osymbols = osymbols
            self.fst = fst

    def __repr__(self):
        return f'{__class__.__name__}({self.fst!r}, {self.isymbols!r}, {self.osymbols!r})'

    def acceptor(self, text):
        return FST.from_string(text, self.isymbols)

    def transduce(self, text):
        "Composed machine for `text`; raises `CompositionMismatch` when it is empty."
        composed = self.acceptor(text) @ self.fst
        if not composed.num_states():
            raise CompositionMismatch(text)
        return composed

    def __call__(self, text):
        return decode(self.transduce(text), self.osymbols)

    def save(self, directory):
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        paths = [directory / CONVERTER_FILE, directory / ISYMBOLS_FILE, directory / OSYMBOLS_FILE]
        self.fst.write_text(paths[0])
        self.isymbols.write_text(paths[1])
        self.osymbols.write_text(paths[2])
        return paths

    @classmethod
    def load(cls, directory):
        directory = Path(directory)
        isymbols = SymbolTable.read_text(directory / ISYMBOLS_FILE, name='isymbols')
        osymbols = SymbolTable.read_text(directory / OSYMBOLS_FILE, name='osymbols')
        fst = FST.read_text(directory / CONVERTER_FILE, isymbols, osymbols)
        return cls(isymbols, osymbols, fst)


class Reversal:
    "The reversal machine of one string, over a symbol table of its characters."

    def __init__(self, text, symbols=None):
        self.text = text
        self.symbols = SymbolTable('symbols') if symbols is None else symbols
        self.fst = reversal(text, self.symbols)

    def __repr__(self):
        return f'{__class__.__name__}({self.text!r})'

    def transduce(self):
        "The reversal machine applied to the acceptor of its own string."
        composed = FST.from_string(self.text, self.symbols) @ self.fst
        if not composed.num_states():
            raise CompositionMismatch(self.text)
        return composed

    def __call__(self):
        return decode(self.fst, self.symbols)

    def save(self, directory):
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        paths = [directory / REVERSAL_FILE, directory / REVERSAL_SYMBOLS_FILE]
        self.fst.write_text(paths[0])
        self.symbols.write_text(paths[1])
        return paths
