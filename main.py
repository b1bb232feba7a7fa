from rich.pretty import pprint

from foldout import *

__prog__ = "demo"

parser = Parser(shell=True)
parser.add_documentation("Options:")
parser.add_option("verbose", "false", alias="v", type=boolean, descr="print the parsed options")
mode = parser.add_option("mode", "basic", alias="m", choices=("basic", "advanced"), descr="feature set")


@mode.unlocker
def advanced(value):
    if value != "advanced":
        return False
    parser.add_documentation("Advanced options:")
    parser.add_option("level", "1", alias="l", type=int, descr="optimization level")
    return True


if __name__ == '__main__':
    args = parser.parse()
    parser.print_usage()
    parser.print_values()
    if parser["verbose"].parsed:
        pprint([parser[name] for name in parser.registry])
        pprint(args)
