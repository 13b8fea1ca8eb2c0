"""python -m uvm"""

from uvm.cli import main

main()
