"""Session control for the lameval language. Runs input units either from a file (file interpretation mode) or
line by line (command-line mode), keeping one namespace of assignments for the whole session.
"""

from termcolor import colored

from lameval.lang.error import GenericException
from lameval.lang.numerical import numberify
from lameval.lang.parser import parse
from lameval.pure.lexical import NormalOrderReducer


class Session:
    """Governs a lameval session, with control over the namespace of assignments."""
    SH_FILE = "<in>"  # command-line interpreter filename
    SEPARATOR = "------------------"

    def __init__(self, error_handler, path, cmd_line, max_steps=None, color=True, numerals=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.color = color
        self.numerals = numerals  # whether or not Church numerals are printed as numbers

        self.reducer = NormalOrderReducer(max_steps)
        self.namespace = {}  # dict of name: normalized λ-term bound by assignments
        self.results = []
        self.line_num = 0

        if self.cmd_line:
            self.error_handler.fatal = False
        elif path == Session.SH_FILE:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess(text):
        """Removes carriage returns and surrounding whitespace."""
        return text.replace("\r", "").strip()

    @staticmethod
    def preprocess_line(line, prev=""):
        """Joins line to prev (a line waiting for continuation). Returns updated line and whether it still needs a
        continuation, which is the case while parentheses are unbalanced.
        """
        if prev:
            line = prev + " " + line
        line = line.rstrip("\r\n")
        return line, line.count("(") > line.count(")")

    def run(self):
        """File interpretation mode: the whole file at self.path is one input unit."""
        try:
            with open(self.path, "r", encoding="utf-8") as file:
                text = file.read()
        except OSError:
            raise GenericException("'{}' could not be opened", self.path, diagnosis=False)

        return self.execute(text)

    def load(self, path):
        """Runs the file at path in this session, so its assignments become part of self.namespace."""
        prev_path = self.path
        self.path = path
        self.error_handler.register_file(path)
        try:
            return self.run()
        finally:
            self.path = prev_path

    def execute(self, text):
        """Parses text, echoes every statement with names resolved, evaluates them in order and prints the result of
        the last one. Assignments evaluated earlier are visible to later statements.
        """
        text = Session.preprocess(text)
        if self.path == Session.SH_FILE:
            self.line_num += 1  # loaded files do not count as shell lines
            self.error_handler.register_line(self.path, text, self.line_num)  # in case error is raised
        else:
            self.error_handler.register_line(self.path, None, 1)  # whole files are not echoed in tracebacks

        stmts = parse(text)
        if not stmts:
            raise GenericException("no term found", diagnosis=False)

        inlined = [stmt.inline(self.namespace) for stmt in stmts]
        print("\n".join(stmt.render(self.color) for stmt in inlined))

        for stmt in stmts:
            result = stmt.execute(self.namespace, self.reducer, self.error_handler)

        separator = colored(Session.SEPARATOR, "dark_grey") if self.color else Session.SEPARATOR
        shown = numberify(result) if self.numerals else result
        print(f"{separator}\n{shown.render(self.color)}\n")

        self.results.append(result)
        self.error_handler.remove_line(self.path)  # error was not raised
        return result

    def pop(self):
        """Pops the most recent result."""
        return self.results.pop()
