from os import path
import sys
from argparse import ArgumentParser, FileType, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .evaluator import Evaluator
from .formatting import render
from .lexer import Lexer, Radix
from .parser import parse
from .util import MathsError


logger = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=self.history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


def join_continuations(lines):
    '''
    Yield lines, joining those ending with a backslash to the next one.

    The backslash itself is dropped. A continuation still pending when lines
    run out is yielded as is.
    '''
    pending = ''
    for line in lines:
        line = line.rstrip('\r\n')
        if line.endswith('\\'):
            pending += line[:-1]
            continue
        yield pending + line
        pending = ''
    if pending:
        yield pending


class CLI:
    '''
    Command line interface to the calculator.

    One way in, of:
    - expressions as arguments: maths '1 + 2 * 3'
    - a file of them, one per line: maths -f my_maths.txt
    - standard input: echo '1 + 2 * 3' | maths
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.maths_history'
    # Variable holding the previous result
    ANSWER = 'ans'

    def dumper(self):
        '''
        Dump all tokens: kind, text, and span.
        '''
        print('<kind>\t<repr(text)>\t<span>')
        for line in join_continuations(self._input()):
            for token in Lexer(line):
                start, end = token.span
                print(token.kind.name,
                      repr(line[start:end]),
                      '{}..{}'.format(start, end),
                      sep='\t')
        return 0

    def executor(self):
        '''
        Evaluate every line, printing its result, or what went wrong.

        A failed line does not stop the ones after it.
        '''
        evaluator = Evaluator()
        status = 0
        for line in join_continuations(self._input()):
            if not line.strip():
                continue
            try:
                expression = parse(line)
                result = evaluator.evaluate(expression)
            except MathsError as e:
                status = 1
                logger.debug('Failed on %r', line, exc_info=True)
                if e.span is not None:
                    print(e.span.highlight(line), file=sys.stderr)
                print(e, file=sys.stderr)
                continue
            # Only ever between evaluations
            evaluator.environment.variables[self.ANSWER] = result
            if self.args.quiet:
                print(render(result, self.args.radix))
            else:
                print(expression, '=', render(result, self.args.radix))
        return status

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)
        return 0

    def _input(self):
        '''
        Return the lines to work on, wherever they come from.
        '''
        if self.args.expressions:
            return self.args.expressions
        elif self.args.file is not None:
            return self.args.file
        return self._prompting_input()

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or sys.stdin.isatty() and sys.stdout.isatty():
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            prog='maths',
            description='Do simple maths from the command line')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log what happens, and show '
                                               'stack traces on errors')
        self.argument_parser.add_argument('-q', '--quiet',
                                          action='store_true',
                                          help='output just the result')
        radix_groups = self.argument_parser.add_mutually_exclusive_group()
        radix_groups.add_argument('-x', '--hex',
                                  action='store_const',
                                  const=Radix.HEXADECIMAL,
                                  dest='radix',
                                  help='output results in hexadecimal')
        radix_groups.add_argument('-b', '--bin',
                                  action='store_const',
                                  const=Radix.BINARY,
                                  dest='radix',
                                  help='output results in binary')
        input_groups = self.argument_parser.add_mutually_exclusive_group()
        input_groups.add_argument('-f', '--file',
                                  type=FileType('r'),
                                  help='read expressions from file, one per '
                                       'line; end a line with \\ to '
                                       'continue it on the next')
        input_groups.add_argument('-p', '--prompt',
                                  nargs=OPTIONAL,
                                  const=self.DEFAULT_PROMPT,
                                  help='prompt for expressions even when not '
                                       'on a terminal')
        self.argument_parser.add_argument('expressions',
                                          nargs='*',
                                          metavar='expression')
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          radix=Radix.DECIMAL)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Return the exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.expressions and (self.args.file is not None or
                                      self.args.prompt):
            self.argument_parser.error('expressions given both as arguments '
                                       'and from --file or --prompt')
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format='%(name)s: %(levelname)s: %(message)s',
                            stream=sys.stderr)
        try:
            return self.args.action()
        except KeyboardInterrupt:
            return 1
        finally:
            if self.args.file is not None:
                self.args.file.close()


def main():
    sys.exit(CLI().run())
