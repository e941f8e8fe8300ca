from PyQt6 import QtCore
from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot
import time

from machine import Machine
from memory import RomTooLargeError
from cpu import MachineError
from beeper import Beeper

FPS = 60
TIMER_RATE = 60
EXAMINE_RATE = 4

DEFAULT_SPEED = 500

DISPLAY_UPDTE_NS = 1000000000 / FPS
TIMER_UPDATE_NS = 1000000000 / TIMER_RATE
EXAMINE_UPDTE_NS = 1000000000 / EXAMINE_RATE

def readRom(path):
    """Return the raw contents of a ROM file, or empty bytes if it can't be read."""
    if (path is None or path == ""):
        return b""
    try:
        with open(path, "rb") as bin_f:
            return bin_f.read()
    except OSError as e:
        print(e.strerror, e.filename)
    return b""

def loadMachine(path, rand=None):
    rom = readRom(path)
    try:
        return Machine(rom, rand)
    except RomTooLargeError as e:
        print(e, path)
        return Machine(b"", rand)

class Emulator(QObject):
    keyPressSignal = pyqtSignal(int)
    keyReleaseSignal = pyqtSignal(int)
    stepSignal = pyqtSignal()
    pauseSignal = pyqtSignal()
    runSignal = pyqtSignal()
    resetSignal = pyqtSignal()
    setSpeedSignal = pyqtSignal(int)
    setRomSignal = pyqtSignal(str)
    examineSignal = pyqtSignal(dict)
    errorSignal = pyqtSignal(str)
    uiDisplayUpdateSignal = pyqtSignal(list)

    def __init__(self, romPath, speed=DEFAULT_SPEED, audio=True):
        super().__init__()
        self._romPath = romPath
        self._speed = speed
        self._audio = audio

    @pyqtSlot()
    def run(self):
        self._beeper = Beeper() if self._audio else None
        self._machine = loadMachine(self._romPath)
        self._paused = False
        self._stepTimeNs = 1000000000 / self._speed
        self._executedOnExamine = 0

        self.keyPressSignal.connect(self._keyPressed)
        self.keyReleaseSignal.connect(self._keyReleased)
        self.runSignal.connect(self._run)
        self.pauseSignal.connect(self._pause)
        self.stepSignal.connect(self._step)
        self.resetSignal.connect(self._reset)
        self.setRomSignal.connect(self._setRom)
        self.setSpeedSignal.connect(self._setSpeed)

        self._uiDisplayUpdate()
        self._uiExamineUpdate()

        self._clock()

    @pyqtSlot()
    def finish(self):
        self.keyPressSignal.disconnect()
        self.keyReleaseSignal.disconnect()
        self.runSignal.disconnect()
        self.pauseSignal.disconnect()
        self.stepSignal.disconnect()
        self.resetSignal.disconnect()
        self.setRomSignal.disconnect()
        self.setSpeedSignal.disconnect()
        if (self._beeper is not None):
            self._beeper.close()

    def _clock(self):
        thread = self.thread().currentThread()
        lastStep = time.perf_counter_ns()
        lastTimer = lastStep
        lastExamine = lastStep
        lastDisplayUpdate = lastStep
        while not(thread.isInterruptionRequested() or self._paused):
            ns = time.perf_counter_ns()
            if (ns > lastStep):
                lastStep += self._stepTimeNs
                if (not self._execute()):
                    break

            if (ns > lastTimer):
                lastTimer += TIMER_UPDATE_NS
                self._machine.decrementDelay()
                self._machine.decrementSound()
                self._updateSound()

            if (ns > lastDisplayUpdate):
                lastDisplayUpdate += DISPLAY_UPDTE_NS
                self._uiDisplayUpdate()
            elif (ns > lastExamine):
                lastExamine += EXAMINE_UPDTE_NS
                self._uiExamineUpdate()

            QtCore.QCoreApplication.processEvents()

    def _execute(self):
        try:
            self._machine.step()
        except MachineError as e:
            print(e)
            self._pause()
            self.errorSignal.emit(str(e))
            return False
        return True

    def _updateSound(self):
        if (self._beeper is not None):
            self._beeper.update(self._machine.sound())

    @pyqtSlot()
    def _run(self):
        if (not self._paused):
            return
        self._paused = False
        self._clock()

    @pyqtSlot()
    def _pause(self):
        self._paused = True
        if (self._beeper is not None):
            self._beeper.update(0)
        self._uiDisplayUpdate()
        self._uiExamineUpdate()

    @pyqtSlot()
    def _step(self):
        if (self._paused):
            self._execute()
            self._uiDisplayUpdate()
            self._uiExamineUpdate()

    @pyqtSlot()
    def _reset(self):
        self._machine = loadMachine(self._romPath)
        self._executedOnExamine = 0
        self._updateSound()
        self._uiDisplayUpdate()
        self._uiExamineUpdate()

    @pyqtSlot(str)
    def _setRom(self, path):
        self._romPath = path
        self._reset()

    @pyqtSlot(int)
    def _setSpeed(self, speed):
        self._speed = speed
        self._stepTimeNs = 1000000000 / speed

    @pyqtSlot(int)
    def _keyPressed(self, keyCode):
        self._machine.pressKey(keyCode)

    @pyqtSlot(int)
    def _keyReleased(self, keyCode):
        self._machine.releaseKey(keyCode)

    def _uiDisplayUpdate(self):
        self.uiDisplayUpdateSignal.emit(self._machine.pixels())

    def _uiExamineUpdate(self):
        executed = self._machine.executed()
        self.examineSignal.emit({
            **self._machine.examine(),
            **{"EXECUTED": executed - self._executedOnExamine, "PAUSED": self._paused}
        })
        self._executedOnExamine = executed

    def debugRun(self):
        self.runSignal.emit()

    def debugStep(self):
        self.stepSignal.emit()

    def debugPause(self):
        self.pauseSignal.emit()

    def reset(self):
        self.resetSignal.emit()

    def keyPressed(self, keyCode):
        self.keyPressSignal.emit(keyCode)

    def keyReleased(self, keyCode):
        self.keyReleaseSignal.emit(keyCode)

    def setRom(self, path):
        self.setRomSignal.emit(path)

    def setSpeed(self, speed):
        self.setSpeedSignal.emit(speed)
