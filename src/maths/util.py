from functools import wraps


class MathsError(Exception):
    '''
    Base for every error the calculator reports to its user.

    Carries the message, and a list of context lines, innermost first, added
    as the error propagates out of nested expressions.
    '''

    def __init__(self, message, span=None):
        super().__init__(message)
        self.context = []
        self.span = span

    def add_context(self, context):
        self.context.append(context)
        return self

    def __str__(self):
        return '\n    '.join([self.args[0], *self.context])


class ParseError(MathsError):
    pass


class EvalError(MathsError):
    pass


def annotate(fmt):
    '''
    Decorator adding a line of context to errors escaping the wrapped call.

    fmt is formatted with the call's positional arguments, so that methods
    can refer to their first argument as {1}. Anything but a MathsError
    passes through untouched.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except MathsError as e:
                raise e.add_context(fmt.format(*args, **kwargs))
        return wrapper
    return decorator
