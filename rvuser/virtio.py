"""Virtio MMIO register map, queue descriptors and block requests."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

# MMIO control registers.
VIRTIO_MMIO_MAGIC_VALUE = 0x000
VIRTIO_MMIO_VERSION = 0x004
VIRTIO_MMIO_DEVICE_ID = 0x008
VIRTIO_MMIO_VENDOR_ID = 0x00C
VIRTIO_MMIO_DEVICE_FEATURES = 0x010
VIRTIO_MMIO_DRIVER_FEATURES = 0x020
VIRTIO_MMIO_QUEUE_SEL = 0x030
VIRTIO_MMIO_QUEUE_NUM_MAX = 0x034
VIRTIO_MMIO_QUEUE_NUM = 0x038
VIRTIO_MMIO_QUEUE_READY = 0x044
VIRTIO_MMIO_QUEUE_NOTIFY = 0x050
VIRTIO_MMIO_INTERRUPT_STATUS = 0x060
VIRTIO_MMIO_INTERRUPT_ACK = 0x064
VIRTIO_MMIO_STATUS = 0x070
VIRTIO_MMIO_QUEUE_DESC_LOW = 0x080
VIRTIO_MMIO_QUEUE_DESC_HIGH = 0x084
VIRTIO_MMIO_DRIVER_DESC_LOW = 0x090
VIRTIO_MMIO_DRIVER_DESC_HIGH = 0x094
VIRTIO_MMIO_DEVICE_DESC_LOW = 0x0A0
VIRTIO_MMIO_DEVICE_DESC_HIGH = 0x0A4

# Status register bits.
VIRTIO_CONFIG_S_ACKNOWLEDGE = 1
VIRTIO_CONFIG_S_DRIVER = 2
VIRTIO_CONFIG_S_DRIVER_OK = 4
VIRTIO_CONFIG_S_FEATURES_OK = 8

# Device feature bits.
VIRTIO_BLK_F_RO = 5
VIRTIO_BLK_F_SCSI = 7
VIRTIO_BLK_F_CONFIG_WCE = 11
VIRTIO_BLK_F_MQ = 12
VIRTIO_F_ANY_LAYOUT = 27
VIRTIO_RING_F_INDIRECT_DESC = 28
VIRTIO_RING_F_EVENT_IDX = 29

NUM = 8  # descriptors per queue; a power of two

VRING_DESC_F_NEXT = 1
VRING_DESC_F_WRITE = 2

VIRTIO_BLK_T_IN = 0
VIRTIO_BLK_T_OUT = 1

_DESC = struct.Struct("<QIHH")
_AVAIL = struct.Struct(f"<HH{NUM}HH")
_USED_ELEM = struct.Struct("<II")
_USED_HEAD = struct.Struct("<HH")
_BLK_REQ = struct.Struct("<IIQ")


def _fields(layout: struct.Struct, data: bytes, what: str) -> tuple:
    if len(data) < layout.size:
        raise ValueError(f"{what}: need {layout.size} bytes, got {len(data)}")
    return layout.unpack_from(data)


def _check_ring(ring: tuple, what: str) -> None:
    if len(ring) != NUM:
        raise ValueError(f"{what}: ring must hold {NUM} entries, not {len(ring)}")


@dataclass
class VirtqDesc:
    """One descriptor in the descriptor table."""

    addr: int = 0
    len: int = 0
    flags: int = 0
    next: int = 0

    SIZE: ClassVar[int] = _DESC.size

    @classmethod
    def unpack(cls, data: bytes) -> "VirtqDesc":
        return cls(*_fields(_DESC, data, "virtq_desc"))

    def pack(self) -> bytes:
        return _DESC.pack(self.addr, self.len, self.flags, self.next)


@dataclass
class VirtqAvail:
    """The available ring written by the driver."""

    flags: int = 0
    idx: int = 0
    ring: tuple[int, ...] = (0,) * NUM
    unused: int = 0

    SIZE: ClassVar[int] = _AVAIL.size

    @classmethod
    def unpack(cls, data: bytes) -> "VirtqAvail":
        flags, idx, *rest = _fields(_AVAIL, data, "virtq_avail")
        return cls(flags, idx, tuple(rest[:NUM]), rest[NUM])

    def pack(self) -> bytes:
        _check_ring(tuple(self.ring), "virtq_avail")
        return _AVAIL.pack(self.flags, self.idx, *self.ring, self.unused)


@dataclass
class VirtqUsedElem:
    """One completion record in the used ring."""

    id: int = 0
    len: int = 0

    SIZE: ClassVar[int] = _USED_ELEM.size

    @classmethod
    def unpack(cls, data: bytes) -> "VirtqUsedElem":
        return cls(*_fields(_USED_ELEM, data, "virtq_used_elem"))

    def pack(self) -> bytes:
        return _USED_ELEM.pack(self.id, self.len)


@dataclass
class VirtqUsed:
    """The used ring written by the device."""

    flags: int = 0
    idx: int = 0
    ring: tuple[VirtqUsedElem, ...] = tuple(VirtqUsedElem() for _ in range(NUM))

    SIZE: ClassVar[int] = _USED_HEAD.size + NUM * _USED_ELEM.size

    @classmethod
    def unpack(cls, data: bytes) -> "VirtqUsed":
        if len(data) < cls.SIZE:
            raise ValueError(f"virtq_used: need {cls.SIZE} bytes, got {len(data)}")
        flags, idx = _USED_HEAD.unpack_from(data)
        ring = tuple(
            VirtqUsedElem(*_USED_ELEM.unpack_from(data, _USED_HEAD.size + i * _USED_ELEM.size))
            for i in range(NUM)
        )
        return cls(flags, idx, ring)

    def pack(self) -> bytes:
        _check_ring(tuple(self.ring), "virtq_used")
        return _USED_HEAD.pack(self.flags, self.idx) + b"".join(e.pack() for e in self.ring)


@dataclass
class BlkRequest:
    """Header descriptor of a block-device request."""

    type: int = VIRTIO_BLK_T_IN
    reserved: int = 0
    sector: int = 0

    SIZE: ClassVar[int] = _BLK_REQ.size

    @classmethod
    def unpack(cls, data: bytes) -> "BlkRequest":
        return cls(*_fields(_BLK_REQ, data, "virtio_blk_req"))

    def pack(self) -> bytes:
        return _BLK_REQ.pack(self.type, self.reserved, self.sector)