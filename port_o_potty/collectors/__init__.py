from .sockets import SocketTableReader
from .processes import ProcessTableReader
from .scanner import PortScanner, in_any_range

__all__ = ["SocketTableReader", "ProcessTableReader", "PortScanner", "in_any_range"]
