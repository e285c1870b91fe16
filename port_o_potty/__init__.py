from .api import kill_pid, scan_ports
from .collectors import PortScanner, ProcessTableReader, SocketTableReader
from .errors import InvalidArgument, PlatformCommandError, PortOPottyError, SystemQueryError
from .models import ListenerInfo, PortRange, ProcessRecord, SocketRecord, SocketState
from .terminate import ForcefulTerminator, GracefulTerminator, Terminator, select_terminator

__version__ = "0.1.0"
