from pytest import fixture

from maths import Environment, Evaluator, parse


@fixture
def environment():
    return Environment()


@fixture
def evaluator(environment):
    return Evaluator(environment)


@fixture
def calc(evaluator):
    '''
    Parse and evaluate a line in one go.
    '''
    def calc(line):
        return evaluator.evaluate(parse(line))
    return calc
