from time import time
from domain.ports import Clock

# epoch milliseconds (int)
class SystemClock(Clock):
    def now_ms(self) -> int:
        return int(time() * 1000)
