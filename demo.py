"""
Brainrot Demo

Compiles a small program, shows its bytecode, round-trips it through the
container format and runs it.
"""
import sys
sys.path.insert(0, '.')
from brainrot import Bytecode
from brvm import Context

SOURCE = '''
LOCK IN
    🖕 count down from 3, then say goodbye
    FANUMTAX aura FR 3
    SKIBIDI aura
        SAY aura
        FANUMTAX aura FR aura 😭 1
    RIZZUP
    ONGOD aura
        SAY "unreachable"
    NO CAP
        SAY "liftoff " 💀 3 😏 0.5
    DEADASS
ITS OVER
'''

def main():
    print('=== Brainrot Demo ===')
    print()

    ctx = Context()
    script = ctx.compile(SOURCE, filename='<demo>')
    print('[1] Compiled program')
    print(script.disassemble())
    print()

    data = script.bytecode.serialize()
    print(f'[2] Serialized to {len(data)} bytes')
    assert Bytecode.deserialize(data) == script.bytecode
    print('[3] Container round-trip OK')
    print()

    print('=== Output ===')
    ctx.execute(script)


if __name__ == '__main__':
    main()
