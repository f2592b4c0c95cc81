"""
Example criteria registry modelled on an audio routing policy.

Builds:
    Mode           (exclusive): Normal, RingTone, InCall, InCommunication
    OutputDevices  (inclusive): Earpiece, Speaker, WiredHeadset, Bluetooth
    InputDevices   (inclusive): BuiltinMic, WiredHeadsetMic, BluetoothMic
"""
from selcrit.config import CriterionConfig
from selcrit.criteria import Criteria


AUDIO_MODES = ["Normal", "RingTone", "InCall", "InCommunication"]
OUTPUT_DEVICES = ["Earpiece", "Speaker", "WiredHeadset", "Bluetooth"]
INPUT_DEVICES = ["BuiltinMic", "WiredHeadsetMic", "BluetoothMic"]


def build_example_criteria(config: CriterionConfig = None) -> Criteria:
    criteria = Criteria(config=config)

    mode = criteria.create_exclusive_criterion("Mode")
    for value, literal in enumerate(AUDIO_MODES):
        mode.add_value_pair(value, literal)

    outputs = criteria.create_inclusive_criterion("OutputDevices")
    for bit, literal in enumerate(OUTPUT_DEVICES):
        outputs.add_value_pair(1 << bit, literal)

    inputs = criteria.create_inclusive_criterion("InputDevices")
    for bit, literal in enumerate(INPUT_DEVICES):
        inputs.add_value_pair(1 << bit, literal)

    # Phone call on the speaker, built-in mic
    mode.set_state(mode.get_numerical_value("InCall"))
    outputs.set_state(outputs.get_numerical_value("Speaker"))
    inputs.set_state(inputs.get_numerical_value("BuiltinMic"))
    criteria.reset_all_modified_status()

    return criteria
