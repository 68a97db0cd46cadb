#!/usr/bin/env python3
"""End-to-end example: text transformations by transducer composition.

  1. Build the input and output symbol tables and the converter machine
  2. Encode a string as a linear acceptor over the input symbols
  3. Compose the acceptor with the converter
  4. Decode the best path of the composition
  5. Reverse a string with a string-specific machine

Usage:
    python examples/hello_world.py
"""

from textfst import FST, SymbolTable, case_digit_converter, decode, output_tokens, reversal


def main():

    # --- Step 1: Symbol tables and the converter ---
    #
    # Two separate tables: codes issued by one are meaningless to the other.
    isyms = SymbolTable('isymbols')
    osyms = SymbolTable('osymbols')
    converter = case_digit_converter(isyms, osyms)
    print(f'Converter: {converter!r}, {converter.num_arcs()} self-loops')
    print(f'  {isyms!r}')
    print(f'  {osyms!r}')
    print()

    # --- Step 2: Acceptor for the input ---
    text = 'hello 2 world'
    acceptor = FST.from_string(text, isyms)
    print(f'Acceptor for {text!r}: {acceptor!r}')
    print()

    # --- Step 3: Composition ---
    composed = acceptor @ converter
    print(f'Composed: {composed!r}, linear={composed.is_linear()}')
    print()

    # --- Step 4: Decode ---
    print(f'Tokens:    {output_tokens(composed)}')
    print(f'Converted: {decode(composed)!r}')
    print()

    # --- Step 5: Reversal ---
    symbols = SymbolTable('symbols')
    rev = reversal(text, symbols)
    print(f'Reversal: {rev!r}')
    print(f'Reversed: {decode(rev)!r}')


if __name__ == '__main__':
    main()
