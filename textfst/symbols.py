"""
Symbol tables: dense, bidirectional token <-> integer-code maps.

Code 0 is always the epsilon token.  Codes issued by one table mean nothing
to another table, so an input alphabet and an output alphabet are kept as two
separate instances and handed to every operation that needs them.
"""
from arsenal import Integerizer


EPSILON_TOKEN = '<eps>'
EPSILON = 0

# returned by `lookup` for tokens that were never interned
NO_SYMBOL = -1


class UnknownCode(KeyError):
    "A code was resolved against a table that never issued it."

    def __init__(self, code, table=None):
        self.code = code
        self.table = table
        super().__init__(code)

    def __str__(self):
        where = f' in symbol table {self.table!r}' if self.table else ''
        return f'Unknown symbol code {self.code!r}{where}'


class SymbolTable:

    def __init__(self, name='symbols', tokens=()):
        self.name = name
        self._index = Integerizer()
        self._index(EPSILON_TOKEN)
        for x in tokens:
            self.intern(x)

    def __repr__(self):
        return f'{__class__.__name__}({self.name!r}, {len(self)} symbols)'

    def __len__(self):
        return len(self._index)

    def __contains__(self, token):
        return token in self._index

    def __iter__(self):
        "Iterate over `(code, token)` pairs in code order."
        for code in range(len(self._index)):
            yield code, self._index[code]

    def __eq__(self, other):
        return isinstance(other, SymbolTable) and list(self) == list(other)

    def tokens(self):
        return [token for _, token in self]

    def intern(self, token):
        "Return the code of `token`, allocating the next dense code if it is new."
        if not isinstance(token, str):
            raise TypeError(f'Symbol tokens must be strings, got {token!r}')
        return self._index(token)

    def lookup(self, token):
        "Return the code of `token` or `NO_SYMBOL`; never mutates the table."
        if token in self._index:
            return self._index(token)
        return NO_SYMBOL

    def resolve(self, code):
        if not isinstance(code, int) or not 0 <= code < len(self._index):
            raise UnknownCode(code, self.name)
        return self._index[code]

    #___________________________________________________________________________
    # Text serialization: one `token<TAB>code` line per symbol, in code order.
    # Tokens may contain spaces, so only the tab separates fields.

    def write_text(self, path):
        for code, token in self:
            if '\n' in token or '\r' in token:
                raise ValueError(f'Cannot write symbol {code} ({token!r}): line breaks are not allowed in tokens')
        with open(path, 'w', encoding='utf-8') as f:
            for code, token in self:
                f.write(f'{token}\t{code}\n')

    @classmethod
    def read_text(cls, path, name=None):
        table = cls(name=name or 'symbols')
        with open(path, encoding='utf-8') as f:
            for lineno, line in enumerate(f, 1):
                line = line.rstrip('\n')
                if not line:
                    continue
                token, sep, code = line.rpartition('\t')
                if not sep or not code.isdigit():
                    raise ValueError(f'{path}:{lineno}: expected "token<TAB>code", got {line!r}')
                if table.intern(token) != int(code):
                    raise ValueError(f'{path}:{lineno}: code {code} for {token!r} is not dense')
        return table
