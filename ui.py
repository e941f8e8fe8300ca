import argparse
import sys

from PyQt6 import QtCore, QtGui, QtWidgets
from PyQt6.QtCore import Qt, pyqtSlot, QByteArray
from PyQt6.QtWidgets import QGraphicsScene, QFileDialog, QMessageBox

import display
from emulator import Emulator, DEFAULT_SPEED

DEFAULT_SCALE = 10

SPEEDS = (250, 500, 1000, 2000)

#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   Q W E R
#   7 8 9 E        A S D F
#   A 0 B F        Z X C V
KEY_MAP = {
    Qt.Key.Key_X: 0x0,
    Qt.Key.Key_1: 0x1,
    Qt.Key.Key_2: 0x2,
    Qt.Key.Key_3: 0x3,
    Qt.Key.Key_Q: 0x4,
    Qt.Key.Key_W: 0x5,
    Qt.Key.Key_E: 0x6,
    Qt.Key.Key_A: 0x7,
    Qt.Key.Key_S: 0x8,
    Qt.Key.Key_D: 0x9,
    Qt.Key.Key_Z: 0xA,
    Qt.Key.Key_C: 0xB,
    Qt.Key.Key_4: 0xC,
    Qt.Key.Key_R: 0xD,
    Qt.Key.Key_F: 0xE,
    Qt.Key.Key_V: 0xF,
}

def parseArgs(argv=None):
    parser = argparse.ArgumentParser(
        description='A CHIP-8 emulator.'
    )
    parser.add_argument('-r', '--rom', metavar='PATH', help='Loads the specified ROM')
    parser.add_argument('--speed', type=int, help='Instructions per second (default %d)' % DEFAULT_SPEED)
    parser.add_argument('--scale', type=int, help='Screen pixel size (default %d)' % DEFAULT_SCALE)
    parser.add_argument('--fullscreen', action='store_true', help='Start in full screen mode')
    parser.add_argument('--mute', action='store_true', help='Disable sound')
    args = parser.parse_args(argv)
    if (args.speed is not None and args.speed <= 0):
        parser.error('--speed must be positive')
    if (args.scale is not None and args.scale <= 0):
        parser.error('--scale must be positive')
    return args

class Window(QtWidgets.QMainWindow):
    def __init__(self, args, parent=None):
        super().__init__(parent)

        self.setWindowTitle("CHIP-8 Emulator")

        self._settings = QtCore.QSettings('chip8', 'CHIP-8 Emulator')
        self._loadSettings(args)
        self._setupUI()

        self._screenUI = ScreenUI(self._examine, self._error, self._rom, self._speed, not args.mute)
        self.setCentralWidget(self._screenUI)
        self.resize(display.SCR_WIDTH * self._scale, display.SCR_HEIGHT * self._scale + self.menuBar().sizeHint().height())

        geometry = self._settings.value("window/window_geometry", QByteArray())
        if (not geometry.isEmpty() and args.scale is None):
            self.restoreGeometry(geometry.data())

        self._screenUI.setFocus()

    def _loadSettings(self, args):
        self._rom = self._settings.value("emulator/rom", None)
        self._speed = int(self._settings.value("emulator/speed", DEFAULT_SPEED))
        self._scale = DEFAULT_SCALE
        if args.rom:
            self._rom = args.rom
        if args.speed:
            self._speed = args.speed
        if args.scale:
            self._scale = args.scale

    def _saveSettings(self):
        self._settings.setValue('window/window_geometry', self.saveGeometry())
        self._settings.setValue('emulator/speed', self._speed)
        if (self._rom):
            self._settings.setValue('emulator/rom', self._rom)

    def _setupUI(self):
        fileMenu = self.menuBar().addMenu("&File")
        self.actionOpenRom = self._addAction(fileMenu, "&Open ROM...", self.on_actionOpenRom_triggered)
        self.actionOpenRom.setShortcut(QtGui.QKeySequence.StandardKey.Open)
        fileMenu.addSeparator()
        self.actionExit = self._addAction(fileMenu, "E&xit", self.close)
        self.actionExit.setShortcut(QtGui.QKeySequence(Qt.Key.Key_Escape))

        emuMenu = self.menuBar().addMenu("&Emulation")
        self.actionRun = self._addAction(emuMenu, "&Run", self.on_actionRun_triggered)
        self.actionRun.setShortcut(QtGui.QKeySequence("F5"))
        self.actionPause = self._addAction(emuMenu, "&Pause", self.on_actionPause_triggered)
        self.actionPause.setShortcut(QtGui.QKeySequence("F6"))
        self.actionStep = self._addAction(emuMenu, "&Step", self.on_actionStep_triggered)
        self.actionStep.setShortcut(QtGui.QKeySequence("F10"))
        self.actionReset = self._addAction(emuMenu, "R&eset", self.on_actionReset_triggered)
        self.actionReset.setShortcut(QtGui.QKeySequence("F2"))

        speedMenu = emuMenu.addMenu("Spee&d")
        groupTool = QtGui.QActionGroup(self)
        groupTool.setExclusive(True)
        for speed in sorted(set(SPEEDS + (self._speed,))):
            action = speedMenu.addAction("%d instructions/s" % speed)
            action.setCheckable(True)
            action.setChecked(speed == self._speed)
            action.triggered.connect(lambda checked, speed=speed: self._setSpeed(speed))
            groupTool.addAction(action)

        self.statusBar()

    def closeEvent(self, event):
        self._saveSettings()
        self._screenUI.close()

        super().closeEvent(event)

    def _addAction(self, menu, text, slot):
        action = QtGui.QAction(text, self)
        action.triggered.connect(slot)
        menu.addAction(action)
        return action

    def _setSpeed(self, speed):
        self._speed = speed
        self._screenUI.setSpeed(speed)

    @pyqtSlot()
    def on_actionOpenRom_triggered(self):
        path, _ = QFileDialog.getOpenFileName(self,
            caption = "Select ROM File",
            filter = "CHIP-8 ROMs (*.ch8 *.c8 *.rom);;All Files (*)")
        if path:
            self._rom = path
            self._screenUI.setRom(path)
            self._settings.setValue('emulator/rom', path)

    @pyqtSlot()
    def on_actionRun_triggered(self):
        self._screenUI.run()

    @pyqtSlot()
    def on_actionPause_triggered(self):
        self._screenUI.pause()

    @pyqtSlot()
    def on_actionStep_triggered(self):
        self._screenUI.step()

    @pyqtSlot()
    def on_actionReset_triggered(self):
        self._screenUI.reset()

    @pyqtSlot(dict)
    def _examine(self, info):
        state = "Paused" if info["PAUSED"] else ("Waiting for key" if info["WAIT"] is not None else "Running")
        self.statusBar().showMessage("%s  PC: 0x%0.3X  I: 0x%0.3X  SP: %d  DT: %d  ST: %d" % (
            state, info["PC"], info["I"], info["SP"], info["DT"], info["ST"]))

    @pyqtSlot(str)
    def _error(self, message):
        QMessageBox.critical(self, "CHIP-8 Emulator", message)

class ScreenUI(QtWidgets.QGraphicsView):
    def __init__(self, examine, error, rom, speed, audio):
        super().__init__()

        self.setScene(QGraphicsScene())

        self.setBackgroundBrush(QtGui.QBrush(QtGui.QColor(0, 0, 0)))
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setFrameStyle(0)

        self._draw()

        self._emulator = Emulator(rom, speed, audio)
        self._emulator.uiDisplayUpdateSignal.connect(self._render)
        self._emulator.examineSignal.connect(examine)
        self._emulator.errorSignal.connect(error)

        self._emulatorThread = QtCore.QThread()
        self._emulator.moveToThread(self._emulatorThread)
        self._emulatorThread.started.connect(self._emulator.run)
        self._emulatorThread.finished.connect(self._emulator.finish)
        self._emulatorThread.start(QtCore.QThread.Priority.LowestPriority)

    def setRom(self, path):
        self._emulator.setRom(path)

    def setSpeed(self, speed):
        self._emulator.setSpeed(speed)

    def step(self):
        self._emulator.debugStep()

    def pause(self):
        self._emulator.debugPause()

    def run(self):
        self._emulator.debugRun()

    def reset(self):
        self._emulator.reset()

    def closeEvent(self, event):
        self._emulator.uiDisplayUpdateSignal.disconnect()
        self._emulator.examineSignal.disconnect()
        self._emulator.errorSignal.disconnect()

        self._emulatorThread.requestInterruption()
        self._emulatorThread.quit()
        self._emulatorThread.wait()

        return super().closeEvent(event)

    def resizeEvent(self, event):
        self.fitInView(self.scene().sceneRect(), Qt.AspectRatioMode.KeepAspectRatio)
        return super().resizeEvent(event)

    def keyPressEvent(self, event):
        if (not event.isAutoRepeat() and event.key() in KEY_MAP):
            self._emulator.keyPressed(KEY_MAP[event.key()])
            return
        return super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if (not event.isAutoRepeat() and event.key() in KEY_MAP):
            self._emulator.keyReleased(KEY_MAP[event.key()])
            return
        return super().keyReleaseEvent(event)

    def _draw(self):
        self.scene().clear()
        self.scene().setItemIndexMethod(QGraphicsScene.ItemIndexMethod.NoIndex)
        self.scene().setSceneRect(0, 0, display.SCR_WIDTH, display.SCR_HEIGHT)

        brush = QtGui.QBrush(QtGui.QColor(255, 255, 255))
        pen = QtGui.QPen(Qt.PenStyle.NoPen)
        self._pixels = [0] * (display.SCR_WIDTH * display.SCR_HEIGHT)
        for i in range(display.SCR_HEIGHT * display.SCR_WIDTH):
            y = i // display.SCR_WIDTH
            x = i % display.SCR_WIDTH
            self._pixels[i] = self.scene().addRect(x, y, 1, 1, pen, brush)
            self._pixels[i].setVisible(False)

    @pyqtSlot(list)
    def _render(self, pixels):
        for i, pixel in enumerate(self._pixels):
            pixel.setVisible(pixels[i] == 1)

def main(argv=None):
    app = QtWidgets.QApplication(sys.argv if argv is None else [sys.argv[0]] + argv)
    args = parseArgs(argv)
    window = Window(args)
    if (args.fullscreen):
        window.showFullScreen()
    else:
        window.show()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
