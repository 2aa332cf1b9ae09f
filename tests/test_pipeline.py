"""End-to-end tests for the segmentation pipeline."""

from __future__ import annotations

import numpy as np
import pytest

from maskdecoder.config import (
    CompositorSettings,
    MergeRule,
    NetworkSettings,
    OutputMode,
    PaletteGrowth,
    PaletteSettings,
)
from maskdecoder.palette import Palette
from maskdecoder.pipeline import InputSizeSchedule, InstanceSegmentationPipeline
from tests.tensors import make_detection_tensor, make_mask_tensor

COCO_HEAD = ["person", "bicycle", "car", "motorcycle", "airplane", "bus"]


@pytest.fixture
def make_pipeline(decoder_settings, palette_settings, network_settings):
    def _make(compositor_settings, class_names=COCO_HEAD, **kwargs):
        return InstanceSegmentationPipeline(
            class_names=class_names,
            decoder_settings=decoder_settings,
            compositor_settings=compositor_settings,
            palette_settings=kwargs.pop("palette_settings", palette_settings),
            network_settings=kwargs.pop("network_settings", network_settings),
            **kwargs,
        )

    return _make


def test_instance_mode_single_detection(make_pipeline, instance_settings) -> None:
    pipeline = make_pipeline(instance_settings)
    detections = make_detection_tensor([(1, 0.9, 0.1, 0.1, 0.3, 0.3)])
    masks = make_mask_tensor(1, 2, value=1.0)

    output = pipeline.process(detections, masks, (100, 100))

    assert output.output_mode == OutputMode.INSTANCE
    assert output.label_image is None
    (instance,) = output.instances
    assert instance.box.to_xywh() == (10, 10, 21, 21)
    assert instance.class_name == "bicycle"
    assert instance.mask.shape == (100, 100)
    assert bool(np.all(instance.mask[10:31, 10:31] == 1))
    assert instance.pixel_count == 21 * 21
    assert output.objects[0] == instance.to_object()


@pytest.mark.parametrize("merge_rule", list(MergeRule))
def test_label_mode_disjoint_objects(make_pipeline, merge_rule) -> None:
    pipeline = make_pipeline(CompositorSettings(output_mode=OutputMode.LABEL, merge_rule=merge_rule))
    detections = make_detection_tensor(
        [
            (2, 0.8, 0.1, 0.1, 0.3, 0.3),
            (5, 0.7, 0.5, 0.5, 0.7, 0.7),
        ]
    )
    masks = make_mask_tensor(2, 6, value=1.0)

    output = pipeline.process(detections, masks, (100, 100))

    label_image = output.label_image
    assert label_image.shape == (100, 100)
    assert set(np.unique(label_image).tolist()) == {0, 3, 6}
    assert bool(np.all(label_image[10:31, 10:31] == 3))
    assert bool(np.all(label_image[50:71, 50:71] == 6))
    assert int(np.count_nonzero(label_image)) == 2 * 21 * 21
    assert [obj.class_name for obj in output.objects] == ["car", "bus"]
    assert output.instances == []


@pytest.mark.parametrize("mode", list(OutputMode))
def test_threshold_confidence_is_excluded(make_pipeline, mode) -> None:
    pipeline = make_pipeline(CompositorSettings(output_mode=mode))
    detections = make_detection_tensor([(1, 0.5, 0.1, 0.1, 0.3, 0.3)])

    output = pipeline.process(detections, make_mask_tensor(1, 2), (100, 100))

    assert output.objects == []
    assert output.instances == []
    if output.label_image is not None:
        assert not bool(np.any(output.label_image))


def test_unknown_class_gets_synthesized_name(make_pipeline, instance_settings) -> None:
    pipeline = make_pipeline(instance_settings, class_names=COCO_HEAD[:5])
    detections = make_detection_tensor([(9, 0.9, 0.1, 0.1, 0.3, 0.3)])

    output = pipeline.process(detections, make_mask_tensor(1, 10), (40, 40))

    assert output.objects[0].class_name == "unknown 9"


def test_degenerate_boxes_are_skipped(make_pipeline, label_settings) -> None:
    pipeline = make_pipeline(label_settings)
    detections = make_detection_tensor(
        [
            (1, 0.9, 0.5, 0.5, 0.3, 0.3),
            (2, 0.9, 0.1, 0.1, 0.2, 0.2),
        ]
    )

    output = pipeline.process(detections, make_mask_tensor(2, 3), (100, 100))

    assert [obj.object_id for obj in output.objects] == [1]


def test_lazy_palette_follows_mask_channels(make_pipeline, label_settings) -> None:
    pipeline = make_pipeline(label_settings)

    assert len(pipeline.palette) == 1
    output = pipeline.process(make_detection_tensor([]), make_mask_tensor(0, 90), (10, 10))

    assert len(output.palette) == 91
    assert output.palette[0] == (0, 0, 0)


def test_eager_palette_follows_class_names(make_pipeline, label_settings) -> None:
    pipeline = make_pipeline(
        label_settings,
        palette_settings=PaletteSettings(seed=0, growth=PaletteGrowth.EAGER),
    )

    assert len(pipeline.palette) == len(COCO_HEAD) + 1
    output = pipeline.process(make_detection_tensor([]), make_mask_tensor(0, 90), (10, 10))
    assert len(output.palette) == len(COCO_HEAD) + 1

    pipeline.set_class_names(COCO_HEAD[:2])
    assert len(pipeline.palette) == len(COCO_HEAD) + 1


def test_palette_is_stable_across_frames(make_pipeline, label_settings) -> None:
    pipeline = make_pipeline(label_settings)
    first = pipeline.process(make_detection_tensor([]), make_mask_tensor(0, 4), (10, 10))
    second = pipeline.process(make_detection_tensor([]), make_mask_tensor(0, 8), (10, 10))

    assert second.palette[: len(first.palette)] == first.palette


def test_shared_palette_is_used(make_pipeline, label_settings) -> None:
    palette = Palette(seed=42)
    pipeline = make_pipeline(label_settings, palette=palette)

    pipeline.process(make_detection_tensor([]), make_mask_tensor(0, 3), (10, 10))

    assert pipeline.palette is palette
    assert len(palette) == 4


def test_malformed_detection_tensor_fails_whole_image(make_pipeline, label_settings) -> None:
    pipeline = make_pipeline(label_settings)

    with pytest.raises(ValueError):
        pipeline.process(np.zeros((1, 1, 3), dtype=np.float32), make_mask_tensor(1, 2), (10, 10))


def test_malformed_mask_tensor_fails_whole_image(make_pipeline, label_settings) -> None:
    pipeline = make_pipeline(label_settings)
    detections = make_detection_tensor([(1, 0.9, 0.1, 0.1, 0.3, 0.3)])

    with pytest.raises(ValueError):
        pipeline.process(detections, np.zeros((1, 2, 15), dtype=np.float32), (10, 10))


def test_missing_mask_slice_fails_whole_image(make_pipeline, instance_settings) -> None:
    pipeline = make_pipeline(instance_settings)
    detections = make_detection_tensor(
        [
            (1, 0.9, 0.1, 0.1, 0.3, 0.3),
            (1, 0.9, 0.1, 0.1, 0.3, 0.3),
        ]
    )

    with pytest.raises(ValueError, match="detections"):
        pipeline.process(detections, make_mask_tensor(1, 2), (10, 10))


@pytest.mark.parametrize("shape", [(0, 10), (10, 0, 3), (10,), None])
def test_invalid_image_shape_is_rejected(make_pipeline, label_settings, shape) -> None:
    pipeline = make_pipeline(label_settings)

    with pytest.raises(ValueError):
        pipeline.process(make_detection_tensor([]), make_mask_tensor(0, 2), shape)


def test_process_image_uses_image_extent(make_pipeline, instance_settings) -> None:
    pipeline = make_pipeline(instance_settings)
    image = np.zeros((60, 80, 3), dtype=np.uint8)
    detections = make_detection_tensor([(0, 0.9, 0.5, 0.5, 0.6, 0.6)])

    output = pipeline.process_image(detections, make_mask_tensor(1, 1), image)

    assert output.image_shape == (60, 80)
    assert output.instances[0].mask.shape == (60, 80)
    assert output.objects[0].box.to_xywh() == (40, 30, 9, 7)


def test_process_image_rejects_missing_image(make_pipeline, label_settings) -> None:
    pipeline = make_pipeline(label_settings)

    with pytest.raises(ValueError, match="not available"):
        pipeline.process_image(make_detection_tensor([]), make_mask_tensor(0, 2), None)


def test_processing_time_is_recorded(make_pipeline, label_settings) -> None:
    output = make_pipeline(label_settings).process(
        make_detection_tensor([]), make_mask_tensor(0, 2), (10, 10)
    )

    assert output.processing_time_ms >= 0.0


def test_runtime_updates(make_pipeline, label_settings) -> None:
    pipeline = make_pipeline(label_settings)
    detections = make_detection_tensor([(1, 0.6, 0.1, 0.1, 0.3, 0.3)])
    masks = make_mask_tensor(1, 2, value=0.4)

    assert pipeline.process(detections, masks, (20, 20)).object_count == 1

    pipeline.update_thresholds(confidence_threshold=0.7)
    assert pipeline.process(detections, masks, (20, 20)).object_count == 0

    pipeline.update_thresholds(confidence_threshold=0.5, mask_threshold=0.45)
    pipeline.set_output_mode(OutputMode.INSTANCE)
    output = pipeline.process(detections, masks, (20, 20))
    assert pipeline.output_mode == OutputMode.INSTANCE
    assert output.instances[0].pixel_count == 0


def test_runtime_updates_validate_thresholds(make_pipeline, label_settings) -> None:
    pipeline = make_pipeline(label_settings)

    with pytest.raises(ValueError):
        pipeline.update_thresholds(mask_threshold=1.5)
    with pytest.raises(ValueError):
        pipeline.update_thresholds(confidence_threshold=-0.1)


def test_set_merge_rule(make_pipeline, label_settings) -> None:
    pipeline = make_pipeline(label_settings)
    detections = make_detection_tensor(
        [
            (0, 0.9, 0.0, 0.0, 0.5, 0.5),
            (1, 0.6, 0.0, 0.0, 0.5, 0.5),
        ]
    )
    masks = make_mask_tensor(2, 2)

    highest = pipeline.process(detections, masks, (10, 10)).label_image
    pipeline.set_merge_rule(MergeRule.BITWISE_OR)
    ored = pipeline.process(detections, masks, (10, 10)).label_image

    assert int(highest[2, 2]) == 1
    assert int(ored[2, 2]) == 3


def test_network_input_size_alternates_when_enabled(make_pipeline, label_settings) -> None:
    pipeline = make_pipeline(
        label_settings,
        network_settings=NetworkSettings(alternate_input_size=True),
    )

    sizes = [pipeline.next_network_input_size() for _ in range(3)]
    output = pipeline.process(make_detection_tensor([]), make_mask_tensor(0, 2), (10, 10))
    after = pipeline.process(make_detection_tensor([]), make_mask_tensor(0, 2), (10, 10))

    assert sizes == [832, 768, 832]
    assert output.network_input_size == 832
    assert after.network_input_size is None


def test_input_size_schedule_is_constant_by_default(network_settings) -> None:
    schedule = InputSizeSchedule(network_settings)

    assert [schedule.next_size() for _ in range(3)] == [800, 800, 800]
    assert schedule.peek() == 800


def test_combined_mask_in_instance_mode(make_pipeline, instance_settings) -> None:
    pipeline = make_pipeline(instance_settings)
    detections = make_detection_tensor(
        [
            (0, 0.9, 0.0, 0.0, 0.2, 0.2),
            (1, 0.9, 0.5, 0.5, 0.7, 0.7),
        ]
    )

    combined = pipeline.process(detections, make_mask_tensor(2, 2), (20, 20)).get_combined_mask()

    assert set(np.unique(combined).tolist()) == {0, 1, 2}
