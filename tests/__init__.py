import lox


def capture(captureType):
    """
    Returns functions for data capture and retrieval.

    Arguments
    ---------
    - captureType: str
        The type of capture-return function pair to return,
        'output' or 'error'

    Return
    ------
    capture(), return()
    """
    storage = {'data': None}

    def captureOutput(
        *objects,
        sep=' ',
        end='\n',
        **_,
    ):
        """
        Captures output into a storage object.
        Can be used interchangeably with Python's built-in print().
        """
        outputstr = sep.join([str(obj) for obj in objects]) + end
        storage['data'] += outputstr

    def returnData():
        """Returns the captured data"""
        return storage['data']

    if captureType in ('output', 'error'):
        storage['data'] = ''
        return captureOutput, returnData
    raise ValueError(f"Invalid captureType {captureType!r}")


def run(code, interpreter=None):
    """
    Runs code in a Lox interpreter, capturing its output and errors.

    Return
    ------
    The run's Result, with the captured 'output' and 'errortext' added
    """
    interpreter = interpreter or lox.Lox()
    captureOutput, returnOutput = capture('output')
    captureError, returnError = capture('error')
    interpreter.registerHandlers(
        output=captureOutput,
        error=captureError,
    )
    result = interpreter.run(code)
    result['output'] = returnOutput()
    result['errortext'] = returnError()
    return result
