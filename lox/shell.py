"""Handles interactive mode for the Lox interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Lox interpreter shell."""
    intro = "Lox interpreter :: Python backend\nType 'help' for more information, 'exit' or Ctrl-D to quit."
    prompt = "> "
    commands = ("exit", "help", "EOF")

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def onecmd(self, line):
        """Only a bare command word is a command; any other line is Lox source."""
        if line.strip() in self.commands:
            return super().onecmd(line.strip())
        if not line.strip():
            return self.emptyline()
        return self.default(line)

    def default(self, line):
        """Runs one line of Lox; a lone expression is echoed."""
        self.sess.run(line, repl=True)

    def do_help(self, arg):
        """Prints a short intro instead of the command list."""
        self.stdout.write("Each line you type is run as Lox source. Variables live until you exit.\n\n"
                         "Try 'var x = 40;' and then 'x + 2;'. A line holding a single expression\n"
                         "prints its value, so 'print' is optional here.\n")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write("\n")
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
