"""Handles interactive/command-line mode for tempo interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """tempo interpreter shell."""
    intro = "tempo interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def onecmd(self, line):
        """Every line is a tempo statement, so cmd's own parsing is bypassed except for shell commands."""
        command = line.strip()
        if command in ("", "help", "?", "vars", "EOF"):
            return super().onecmd(command)
        return self.default(line)

    def default(self, line):
        """Executes arbitrary tempo statement."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            self.sess.execute(line, self.line_num)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        self.stdout.write("Welcome to the tempo interpreter!\n\n"
                          "tempo has four statements: 'let a = 5;' binds a variable to an integer or to a \n"
                          "single +, -, * or / of two values, 'if (a > b) { ... }' sets c to the larger or \n"
                          "smaller operand, 'print a;' prints a variable and 'exit(0);' quits.\n\n"
                          "Type 'vars' to list bound variables.\n")

    def do_vars(self, arg):
        """Lists bound variables."""
        for name, value in self.sess.store.items():
            self.stdout.write(f"{name} = {value}\n")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write("\n")
        return True
