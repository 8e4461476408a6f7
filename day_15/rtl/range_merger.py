"""
Range Merger Hardware Implementation using Amaranth HDL

Streaming merge of one row's sensor intervals. Ranges arrive pre-sorted
(start ascending, end descending) and a single accumulator register glues
each one onto the previous when they overlap or are adjacent. A gap of one
missing column is never bridged, so the downstream gap detector still sees
the uncovered cell.

Architecture:
- Input: Stream of signed (start, end) pairs, last_in on the final pair
- Output: Stream of merged (start, end) pairs, last_out on the final pair
- Processing: Single-pass merge, back to IDLE after each stream so the
  same instance handles one row after another
"""

from amaranth import *


class RangeMerger(Elaboratable):
    """
    Hardware module that merges touching ranges of one row.

    Ports:
        Input:
            - start_in: Current range start column (signed)
            - end_in: Current range end column (signed)
            - valid_in: Input data valid signal
            - last_in: Current range is the last one of the row

        Output:
            - start_out: Merged range start column (signed)
            - end_out: Merged range end column (signed)
            - valid_out: Output data valid signal
            - last_out: Merged range is the last one of the row
            - total_coverage: Columns covered by the row (compute_coverage only)
            - ready: Module ready to accept data
    """

    def __init__(self, width=32, compute_coverage=False):
        """
        Initialize the Range Merger module.

        Args:
            width: Bit width of the signed column values (default: 32)
            compute_coverage: If True, accumulate total coverage (default: False)
        """
        self.width = width
        self.compute_coverage = compute_coverage

        # Input interface
        self.start_in = Signal(signed(width))
        self.end_in = Signal(signed(width))
        self.valid_in = Signal()
        self.last_in = Signal()

        # Output interface
        self.start_out = Signal(signed(width))
        self.end_out = Signal(signed(width))
        self.valid_out = Signal()
        self.last_out = Signal()

        # A row never covers more than 2**width columns
        self.total_coverage = Signal(width + 1)

        # Control
        self.ready = Signal()

    def elaborate(self, platform):
        m = Module()

        # Range being accumulated
        accum_start = Signal(signed(self.width))
        accum_end = Signal(signed(self.width))

        new_end = Signal(signed(self.width))
        m.d.comb += new_end.eq(Mux(self.end_in > accum_end, self.end_in, accum_end))

        # Glue when the next range starts at most one column past the accumulator
        touches = Signal()
        m.d.comb += touches.eq(self.start_in <= accum_end + 1)

        if self.compute_coverage:
            coverage_accum = Signal(self.width + 1)
            range_size = Signal(self.width + 1)
            m.d.comb += [
                range_size.eq(accum_end - accum_start + 1),
                self.total_coverage.eq(coverage_accum),
            ]

        with m.FSM():

            with m.State("IDLE"):
                m.d.comb += self.ready.eq(1)
                m.d.sync += [
                    self.valid_out.eq(0),
                    self.last_out.eq(0),
                ]

                with m.If(self.valid_in):
                    m.d.sync += [
                        accum_start.eq(self.start_in),
                        accum_end.eq(self.end_in),
                    ]
                    if self.compute_coverage:
                        m.d.sync += coverage_accum.eq(0)

                    with m.If(self.last_in):
                        m.next = "OUTPUT_LAST"
                    with m.Else():
                        m.next = "PROCESS"

            with m.State("PROCESS"):
                m.d.comb += self.ready.eq(1)
                m.d.sync += [
                    self.valid_out.eq(0),
                    self.last_out.eq(0),
                ]

                with m.If(self.valid_in):
                    with m.If(touches):
                        m.d.sync += accum_end.eq(new_end)

                    with m.Else():
                        # Accumulated range is complete: emit it, restart from input
                        m.d.sync += [
                            self.start_out.eq(accum_start),
                            self.end_out.eq(accum_end),
                            self.valid_out.eq(1),
                            accum_start.eq(self.start_in),
                            accum_end.eq(self.end_in),
                        ]
                        if self.compute_coverage:
                            m.d.sync += coverage_accum.eq(coverage_accum + range_size)

                    with m.If(self.last_in):
                        m.next = "OUTPUT_LAST"

            with m.State("OUTPUT_LAST"):
                m.d.sync += [
                    self.start_out.eq(accum_start),
                    self.end_out.eq(accum_end),
                    self.valid_out.eq(1),
                    self.last_out.eq(1),
                ]
                if self.compute_coverage:
                    m.d.sync += coverage_accum.eq(coverage_accum + range_size)

                m.next = "DONE"

            with m.State("DONE"):
                m.d.sync += [
                    self.valid_out.eq(0),
                    self.last_out.eq(0),
                ]
                m.next = "IDLE"

        return m
