"""Handles interactive/command-line mode for lameval interpreter. Uses cmd as backend."""

import cmd

from lameval.lang.session import Session


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell."""
    intro = "lameval :: untyped lambda calculus\nType 'help' for an introduction, 'exit' to quit."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary lameval input."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line, add_to_prev = Session.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            self.sess.execute(line)

    def _as_term(self, arg):
        """Whether or not a command line is really a λ-term that starts with a command word (ex: 'env = λx.x;')."""
        return bool(arg) or bool(self._tmp_line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if self._as_term(arg):
            return self.default(self.lastcmd)
        print("Welcome to the lameval interpreter!\n\n"
              "Lambda calculus is a Turing-complete language created by Alonzo Church. This \n"
              "interpreter reduces λ-terms to their beta-normal form, and supports named \n"
              "assignments and Church numeral literals.\n\n"
              "Try it out by typing 'id = λx.x;'. This will bind the lambda term 'λx.x' to a \n"
              "name 'id'. Next, try typing 'id y'. This will apply 'id' to 'y', giving 'y' as \n"
              "the result. '\\' can be typed instead of 'λ'.\n\n"
              "Commands: env (list assignments), load FILE, exit. A line starting with 'load ' always loads a \n"
              "file, so apply a term named 'load' as '(load) x'.")

    def do_env(self, arg):
        """Lists the assignments of this session."""
        if self._as_term(arg):
            return self.default(self.lastcmd)
        for name, term in self.sess.namespace.items():
            print(f"{name} = {term.render(self.sess.color, top=False)};")

    def do_load(self, arg):
        """Runs a file in this session: load FILE"""
        if not arg or arg.lstrip()[0] in "=(λ\\" or self._tmp_line:
            return self.default(self.lastcmd)
        with self.sess.error_handler:
            self.sess.load(arg.strip())

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return True

    def do_exit(self, arg):
        """Exits interpreter."""
        if self._as_term(arg):
            return self.default(self.lastcmd)
        return True
