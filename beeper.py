import struct

from PyQt6.QtCore import QIODeviceBase, QByteArray, QIODevice
from PyQt6.QtMultimedia import QAudioFormat, QAudioSink

SAMPLE_RATE = 44100
TONE_FREQ = 440
AMPLITUDE = 8000

class ToneGenerator(QIODevice):
    SAMPLES_PART_SIZE = 1000
    DATA_PART_SIZE = SAMPLES_PART_SIZE * 2

    def __init__(self, format):
        super().__init__()

        self._sampleRate = format.sampleRate()

        period = max(self._sampleRate // TONE_FREQ, 2)
        half = period // 2
        samples = [AMPLITUDE] * half + [-AMPLITUDE] * (period - half)
        self._toneRaw = QByteArray(struct.pack("<%dh" % period, *samples))

        self._pos = 0
        self._playing = False
        self.open(QIODeviceBase.OpenModeFlag.ReadOnly | QIODeviceBase.OpenModeFlag.Unbuffered)

    def readData(self, maxlen):
        data = QByteArray()

        while maxlen:
            if (self._playing):
                toneRawPos = self._pos % self._toneRaw.size()
                chunk = min(maxlen, self._toneRaw.size() - toneRawPos)
                data.append(self._toneRaw.mid(toneRawPos, chunk))
            else:
                chunk = maxlen
                data.append(chunk, b'\0')

            self._pos += chunk
            maxlen -= chunk

        return data.data()

    def writeData(self, data):
        return 0

    def start(self):
        self._playing = True

    def stop(self):
        self._playing = False

    def playing(self):
        return self._playing

    def bytesAvailable(self):
        return self.DATA_PART_SIZE

class Beeper():
    def __init__(self):
        format = QAudioFormat()
        format.setSampleRate(SAMPLE_RATE)
        format.setChannelCount(1)
        format.setSampleFormat(QAudioFormat.SampleFormat.Int16)

        self._tone = QAudioSink(format)
        self._tone.setBufferSize(2048)
        self._toneGenerator = ToneGenerator(format)
        self._tone.start(self._toneGenerator)

    def close(self):
        self._tone.stop()
        self._toneGenerator.close()

    def update(self, sound):
        if (sound > 0):
            if (not self._toneGenerator.playing()):
                self._toneGenerator.start()
        elif (self._toneGenerator.playing()):
            self._toneGenerator.stop()
