# louder

Building blocks for analysing and correcting loudspeaker frequency responses:
fractional-octave frequency bands, biquad filter responses, and models for a
two-way crossover and a parametric equalizer with a loudness target curve.

## Modules

- `louder.frequency_table.FrequencyTable(octave_fraction=24, f_min=20.0, f_max=20000.0)`:
  band centre frequencies taken from a 1/24-octave (Renard R80) table of 272
  values between 12.5 Hz and 30.7 kHz. `frequencies()` returns the bands in
  range (241 for the default table, 31 for `FrequencyTable(3)`).
  `interpolate(response, shift_to_zero=True)` resamples a `{frequency: value}`
  mapping onto the bands: several points in a band are averaged, single points
  between bands are interpolated on a logarithmic frequency axis, and values at
  the ends are extended. With `shift_to_zero` the result is shifted so that its
  maximum is 0.
- `louder.audio_filter`: `FilterType` (`INVALID`, `PEAK`, `LOW_PASS`,
  `HIGH_PASS`, `LOW_SHELF`, `HIGH_SHELF`, `ALL_PASS`, `LOUDNESS`), `BiQuad`
  coefficients and `AudioFilter(filter_type, f, g, q)`.
  `AudioFilter.response(frequencies, cascades=1)` returns a numpy array of
  complex responses at a 48 kHz sample rate, raised to the power `cascades`.
  A `LOUDNESS` filter is a cascade of two peaking filters and a high shelf whose
  gains scale with `g`.
- `louder.time_table`: `lower(ms)` and `upper(ms)` step a millisecond value to
  the next smaller or larger grid point; the grid gets coarser as values grow.
- `louder.ui_util`: `f_to_str(f)` and `f_to_unit(f)` format a frequency for
  display (one decimal below 100 Hz, whole Hz below 10 kHz, kHz above).
- `louder.fastmath`: approximate sine/cosine pairs (`fastest_sincos`,
  `faster_sincos`, `fast_sincos`) and square roots (`fast_sqrt1`..`fast_sqrt3`
  in double precision, `fast_sqrt1f`..`fast_sqrt3f` in single precision).
- `louder.fft`: `fft(samples)` is a forward transform of a real signal whose
  output has the input's length, with the non-redundant `n // 2 + 1` bins first
  and zeros after; `ifft(spectrum)` is the unnormalised inverse, so
  `ifft(fft(x))` equals `len(x) * x`.
- `louder.charts`: `XYSeries` (an ordered list of `(x, y)` points),
  `LinChart` (time axis bounded to -200..800 ms) and `LogChart` (frequency axis
  stepping along third-octave bands) with `zoom` and `pan`, the `ChartType` and
  `Calibration` enums, a small `Signal` callback hook, and `ChartModel`, which
  exposes the range of the chart of its type through `x_min()`, `x_max()`,
  `y_min()`, `y_max()` and `tick_interval()`.
- `louder.crossover.CrossoverModel`: low-pass and high-pass handles set
  frequency index, Q (in dB) and gain; the model computes both responses and
  their sum (optionally with the high pass inverted) and reports `ripple()`.
- `louder.strategies`: how handle movements map onto filter parameters for
  each filter type (`PeakingStrategy`, `ShelvingStrategy`,
  `LowHighPassStrategy`, `NoneStrategy`).
- `louder.filter_model.FilterModel`: one equalizer band, its parameters as
  indices into the 1/24-octave table and its response in dB.
- `louder.target.TargetModel`: a loudness-compensation target curve;
  `subscribe_fr(callback)` delivers each new target response and returns a
  function that unsubscribes.
- `louder.equalizer.EqualizerModel(target_model)`: a list of filters, their
  summed response, the measured response with the filters applied
  (`set_measured_response`), the target shifted by `set_level`, a frequency
  range set with the min/max sliders, `add_filter` (placed at the largest
  overshoot over the target, with a fitted bandwidth) and `optimize`, which
  searches around each filter's frequency, Q and gain for the smallest
  deviation from the target.

Changes are reported through `Signal` attributes such as `range_changed`,
`fr_changed`, `values_changed`, `filters_changed` and `status_message`;
connect any callable with `connect`.

## Installation

```
pip install .
```

## Examples

```python
from louder.frequency_table import FrequencyTable
from louder.audio_filter import AudioFilter, FilterType

bands = FrequencyTable(3, 20.0, 20000.0).frequencies()   # 31 third-octave bands
peak = AudioFilter(FilterType.PEAK, 1000.0, -6.0, 1.4)
response = peak.response(bands, 1)                         # complex numpy array
```

```python
from louder.time_table import lower, upper

upper(199)   # 200
lower(200)   # 190
```

```python
from louder.charts import XYSeries
from louder.crossover import CrossoverModel

crossover = CrossoverModel()
crossover.set_handles(XYSeries([(120, -3.0), (120, -3.0), (0, 0.0), (0, 0.0)]))
crossover.set_low_pass_series(XYSeries())
crossover.set_high_pass_series(XYSeries())
crossover.set_sum_series(XYSeries())
print(crossover.ripple())
```

## What it does not do

The package works on responses it is given. It does not record or play audio,
take measurements, compute impulse responses, read or write project files, or
draw anything: chart series and handles are plain `XYSeries` objects for the
caller to display. There is no command-line program and no graphical interface.

## Running the tests

```
pip install .[test]
pytest
```