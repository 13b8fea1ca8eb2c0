"""uvm - Unnarize Verse Manager

按名称从固定远端拉取代码仓到 umods/，并在 uvmpackage.json 中记录依赖。
"""

__version__ = "0.1.0"
