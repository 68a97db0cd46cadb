from textfst.symbols import SymbolTable, UnknownCode, EPSILON, EPSILON_TOKEN, NO_SYMBOL
from textfst.fst import FST, Arc, ONE, NO_STATE, SPACE_TOKEN, SEPARATOR, UnsupportedSymbol
from textfst.compose import compose, CompositionMismatch
from textfst.decode import shortest_path, output_tokens, render, decode
from textfst.rules import case_digit_converter, reversal, reverse, DIGIT_WORDS
from textfst.pipeline import Converter, Reversal
