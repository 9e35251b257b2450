def format_tape(result):
    """
    Concatenate the visited tape symbols, no separators.

    Alphabets are capped at 9 symbols, so every cell is one decimal digit.
    """
    return "".join(str(symbol) for symbol in result.symbols)
