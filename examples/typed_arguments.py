import sys
from enum import Enum

from arbor import ArgumentSpec, Command, Program, QuitSignal, between, value_flag
from arbor.parser import accept_typed


class Unit(Enum):
    CELSIUS = "c"
    FAHRENHEIT = "f"


def accept_range(tokens: list[str]) -> range:
    """Accept `start stop [step]` as a range of integers."""
    values = [int(token) for token in tokens]
    if len(values) == 3 and values[2] == 0:
        raise ValueError("step cannot be zero")
    return range(*values)


def show_range(program, record):
    separator = record.flag("separator")
    program.println(separator.join(str(number) for number in record.data))


def convert(program, record):
    unit = record.flag("to")
    for degrees in record.data:
        if unit is Unit.FAHRENHEIT:
            program.printf("{:.1f}F\n", degrees * 9 / 5 + 32)
        else:
            program.printf("{:.1f}C\n", (degrees - 32) * 5 / 9)


def stop(program, record):
    program.println("stopping before the remaining commands")
    raise QuitSignal()


program = Program("typed_arguments", brief="Arbor demo: acceptance functions")

seq = program.add_command(
    name="seq",
    brief="Print a range of integers",
    argument=between(2, 3).with_accept(accept_range),
    run=show_range,
)
seq.add_flag(value_flag("separator", "s", default=" ", help="Text between numbers"))

program.add_command(
    Command(
        name="convert",
        brief="Convert temperatures",
        argument=ArgumentSpec(1, None, accept_typed(float, scalar=False)),
        flags=[value_flag("to", "t", type=Unit, default=Unit.FAHRENHEIT)],
        run=convert,
    )
)

program.add_command(name="stop", brief="Raise QuitSignal", run=stop)

if __name__ == "__main__":
    sys.exit(program.main())
