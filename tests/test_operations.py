import pytest

from apple2emu import operations as ops
from apple2emu.cpu import BREAK_FLAG, BRK_LOW_ADDR, ROM_START, STACK_BASE, Cpu


@pytest.fixture
def cpu():
    return Cpu()


@pytest.mark.parametrize(
    "op, register", [(ops.lda, "a"), (ops.ldx, "x"), (ops.ldy, "y")]
)
def test_loads_set_register_and_negative(cpu, op, register):
    cpu.memory[0x10] = 0x80
    op(cpu, 0x10)
    assert getattr(cpu, register) == 0x80
    assert cpu.n is True
    assert cpu.z is False


@pytest.mark.parametrize(
    "op, register", [(ops.lda, "a"), (ops.ldx, "x"), (ops.ldy, "y")]
)
def test_loads_of_zero_set_zero_flag(cpu, op, register):
    setattr(cpu, register, 0x33)
    cpu.memory[0x20] = 0
    op(cpu, 0x20)
    assert getattr(cpu, register) == 0
    assert cpu.z is True
    assert cpu.n is False


@pytest.mark.parametrize(
    "op, register", [(ops.sta, "a"), (ops.stx, "x"), (ops.sty, "y")]
)
def test_stores_write_register(cpu, op, register):
    setattr(cpu, register, 0x37)
    op(cpu, 0x0200)
    assert cpu.memory[0x0200] == 0x37


def test_store_into_rom_is_ignored(cpu):
    cpu.memory[ROM_START] = 0x12
    cpu.a = 0x99
    ops.sta(cpu, ROM_START)
    assert cpu.memory[ROM_START] == 0x12


def test_inc_wraps_to_zero(cpu):
    cpu.memory[0x30] = 0xFF
    ops.inc(cpu, 0x30)
    assert cpu.memory[0x30] == 0
    assert cpu.z is True


def test_dec_then_inc_round_trip(cpu):
    cpu.memory[0x30] = 0
    ops.dec(cpu, 0x30)
    assert cpu.n is True
    assert cpu.z is False
    ops.inc(cpu, 0x30)
    assert cpu.memory[0x30] == 0


@pytest.mark.parametrize(
    "up, down, register", [(ops.inx, ops.dex, "x"), (ops.iny, ops.dey, "y")]
)
def test_register_increment_decrement_round_trip(cpu, up, down, register):
    setattr(cpu, register, 0)
    down(cpu, 0)
    assert cpu.n is True
    up(cpu, 0)
    assert getattr(cpu, register) == 0
    assert cpu.z is True


def test_pha_pla_round_trip(cpu):
    start_sp = cpu.sp
    cpu.a = 0x5A
    ops.pha(cpu, 0)
    assert cpu.memory[STACK_BASE | start_sp] == 0x5A
    cpu.a = 0
    ops.pla(cpu, 0)
    assert cpu.a == 0x5A
    assert cpu.sp == start_sp


def test_php_pushes_break_and_plp_restores_flags(cpu):
    cpu.c, cpu.z, cpu.i, cpu.d, cpu.v, cpu.n = True, False, False, True, True, False
    ops.php(cpu, 0)
    pushed = cpu.memory[STACK_BASE | ((cpu.sp + 1) & 0xFF)]
    assert pushed & BREAK_FLAG
    cpu.c, cpu.z, cpu.i, cpu.d, cpu.v, cpu.n = False, True, True, False, False, True
    ops.plp(cpu, 0)
    assert (cpu.c, cpu.z, cpu.i, cpu.d, cpu.v, cpu.n) == (
        True, False, False, True, True, False,
    )


def test_plp_leaves_break_but_rti_restores_it(cpu):
    cpu.push(0x00)
    cpu.b = True
    ops.plp(cpu, 0)
    assert cpu.b is True
    cpu.push(0x03)
    cpu.push(0x02)
    cpu.push(0x00)
    ops.rti(cpu, 0)
    assert cpu.b is False
    assert cpu.pc == 0x0302


BRANCHES = [
    (ops.bcc, "c", False),
    (ops.bcs, "c", True),
    (ops.beq, "z", True),
    (ops.bne, "z", False),
    (ops.bmi, "n", True),
    (ops.bpl, "n", False),
    (ops.bvc, "v", False),
    (ops.bvs, "v", True),
]


@pytest.mark.parametrize("op, flag, taken_when", BRANCHES)
def test_branch_taken(cpu, op, flag, taken_when):
    setattr(cpu, flag, taken_when)
    cpu.pc = 0x0300
    op(cpu, -2)
    assert cpu.pc == 0x0300 - 2
    op(cpu, 5)
    assert cpu.pc == 0x0300 + 3


@pytest.mark.parametrize("op, flag, taken_when", BRANCHES)
def test_branch_not_taken(cpu, op, flag, taken_when):
    setattr(cpu, flag, not taken_when)
    cpu.pc = 0x0300
    op(cpu, 5)
    assert cpu.pc == 0x0300


def test_branch_accepts_unsigned_offset(cpu):
    cpu.z = True
    cpu.pc = 0x0300
    ops.beq(cpu, 0xFE)
    assert cpu.pc == 0x0300 - 2


def test_jmp_sets_pc(cpu):
    ops.jmp(cpu, 0x1234)
    assert cpu.pc == 0x1234


def test_jsr_rts_round_trip(cpu):
    cpu.pc = 0x0803
    start_sp = cpu.sp
    ops.jsr(cpu, 0x0900)
    assert cpu.pc == 0x0900
    assert cpu.memory[STACK_BASE | start_sp] == 0x08
    assert cpu.memory[STACK_BASE | ((start_sp - 1) & 0xFF)] == 0x02
    ops.rts(cpu, 0)
    assert cpu.pc == 0x0803
    assert cpu.sp == start_sp


def test_brk_and_rti_round_trip(cpu):
    cpu.memory[BRK_LOW_ADDR] = 0x00
    cpu.memory[BRK_LOW_ADDR + 1] = 0x07
    cpu.pc = 0x0301
    cpu.i = False
    cpu.c = True
    start_sp = cpu.sp
    ops.brk(cpu, 0)
    assert cpu.pc == 0x0700
    assert cpu.i is True
    cpu.c = False
    ops.rti(cpu, 0)
    assert cpu.pc == 0x0301 + 1
    assert cpu.c is True
    assert cpu.sp == start_sp


@pytest.mark.parametrize(
    "op, source, target",
    [
        (ops.tax, "a", "x"),
        (ops.tay, "a", "y"),
        (ops.txa, "x", "a"),
        (ops.tya, "y", "a"),
        (ops.tsx, "sp", "x"),
    ],
)
def test_transfers_copy_and_set_flags(cpu, op, source, target):
    setattr(cpu, source, 0x81)
    op(cpu, 0)
    assert getattr(cpu, target) == 0x81
    assert cpu.n is True
    assert cpu.z is False


def test_txs_leaves_flags(cpu):
    cpu.x = 0
    cpu.z = False
    ops.txs(cpu, 0)
    assert cpu.sp == 0
    assert cpu.z is False


def test_adc_carry_out(cpu):
    cpu.a = 0xFF
    cpu.memory[0x40] = 1
    cpu.c = False
    ops.adc(cpu, 0x40)
    assert cpu.a == 0
    assert cpu.c is True
    assert cpu.z is True


def test_adc_signed_overflow(cpu):
    cpu.a = 0x7F
    cpu.memory[0x40] = 1
    cpu.c = False
    ops.adc(cpu, 0x40)
    assert cpu.v is True
    assert cpu.n is True
    assert cpu.c is False


def test_adc_then_sbc_round_trip(cpu):
    cpu.a = 0x3C
    cpu.memory[0x40] = 0x55
    cpu.c = False
    ops.adc(cpu, 0x40)
    cpu.c = True
    ops.sbc(cpu, 0x40)
    assert cpu.a == 0x3C


def test_sbc_borrow(cpu):
    cpu.a = 0
    cpu.memory[0x40] = 1
    cpu.c = True
    ops.sbc(cpu, 0x40)
    assert cpu.c is False
    assert cpu.n is True
    cpu.c = False
    ops.adc(cpu, 0x40)
    assert cpu.a == 0


def test_adc_decimal(cpu):
    cpu.d = True
    cpu.c = False
    cpu.a = 0x09
    cpu.memory[0x40] = 0x01
    ops.adc(cpu, 0x40)
    assert cpu.a == 0x10
    assert cpu.c is False


def test_adc_decimal_carry(cpu):
    cpu.d = True
    cpu.c = False
    cpu.a = 0x99
    cpu.memory[0x40] = 0x01
    ops.adc(cpu, 0x40)
    assert cpu.a == 0
    assert cpu.c is True


def test_sbc_decimal(cpu):
    cpu.d = True
    cpu.c = True
    cpu.a = 0x10
    cpu.memory[0x40] = 0x01
    ops.sbc(cpu, 0x40)
    assert cpu.a == 0x09
    assert cpu.c is True


def test_and_to_zero(cpu):
    cpu.a = 0xF0
    cpu.memory[0x40] = 0x0F
    ops.and_(cpu, 0x40)
    assert cpu.a == 0
    assert cpu.z is True


def test_eor_twice_round_trip(cpu):
    cpu.a = 0x5C
    cpu.memory[0x40] = 0xA7
    ops.eor(cpu, 0x40)
    ops.eor(cpu, 0x40)
    assert cpu.a == 0x5C


def test_eor_with_self_is_zero(cpu):
    cpu.a = 0x5C
    cpu.memory[0x40] = 0x5C
    ops.eor(cpu, 0x40)
    assert cpu.a == 0
    assert cpu.z is True


def test_ora_with_zero_keeps_value(cpu):
    cpu.a = 0x91
    cpu.memory[0x40] = 0
    ops.ora(cpu, 0x40)
    assert cpu.a == 0x91
    assert cpu.n is True


@pytest.mark.parametrize(
    "op, register", [(ops.cmp, "a"), (ops.cpx, "x"), (ops.cpy, "y")]
)
@pytest.mark.parametrize(
    "reg_value, mem_value, carry, zero",
    [(0x40, 0x40, True, True), (0x10, 0x40, False, False), (0x40, 0x10, True, False)],
)
def test_compares(cpu, op, register, reg_value, mem_value, carry, zero):
    setattr(cpu, register, reg_value)
    cpu.memory[0x40] = mem_value
    op(cpu, 0x40)
    assert cpu.c is carry
    assert cpu.z is zero
    assert getattr(cpu, register) == reg_value


def test_asl_acc_carries_out(cpu):
    cpu.a = 0x80
    ops.asl_acc(cpu, 0)
    assert cpu.a == 0
    assert cpu.c is True
    assert cpu.z is True


def test_lsr_memory_carries_out(cpu):
    cpu.memory[0x50] = 0x01
    ops.lsr(cpu, 0x50)
    assert cpu.memory[0x50] == 0
    assert cpu.c is True
    assert cpu.z is True


def test_asl_then_lsr_memory(cpu):
    cpu.memory[0x50] = 0x21
    ops.asl(cpu, 0x50)
    ops.lsr(cpu, 0x50)
    assert cpu.memory[0x50] == 0x21


def test_lsr_acc_then_asl_acc(cpu):
    cpu.a = 0x42
    ops.lsr_acc(cpu, 0)
    assert cpu.c is False
    ops.asl_acc(cpu, 0)
    assert cpu.a == 0x42


def test_rol_ror_accumulator_round_trip(cpu):
    cpu.a = 0x80
    cpu.c = False
    ops.rol_acc(cpu, 0)
    assert cpu.a == 0
    assert cpu.c is True
    ops.ror_acc(cpu, 0)
    assert cpu.a == 0x80
    assert cpu.c is False


def test_rol_ror_memory_round_trip(cpu):
    cpu.memory[0x60] = 0xB5
    cpu.c = True
    ops.rol(cpu, 0x60)
    ops.ror(cpu, 0x60)
    assert cpu.memory[0x60] == 0xB5
    assert cpu.c is True


@pytest.mark.parametrize(
    "op, flag, value",
    [
        (ops.sec, "c", True),
        (ops.sed, "d", True),
        (ops.sei, "i", True),
        (ops.clc, "c", False),
        (ops.cld, "d", False),
        (ops.cli, "i", False),
        (ops.clv, "v", False),
    ],
)
def test_flag_operations(cpu, op, flag, value):
    setattr(cpu, flag, not value)
    op(cpu, 0)
    assert getattr(cpu, flag) is value


def test_bit_copies_top_bits(cpu):
    cpu.a = 0
    cpu.memory[0x70] = 0xC0
    ops.bit(cpu, 0x70)
    assert cpu.z is True
    assert cpu.n is True
    assert cpu.v is True
    assert cpu.a == 0


def test_nop_leaves_state(cpu):
    before = cpu.trace_line()
    ops.nop(cpu, 0)
    assert cpu.trace_line() == before