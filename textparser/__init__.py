# -*- coding: utf-8 -*-

from textparser.common import ConfigError, ParseResult
from textparser.logger import Logger
from textparser.sinks import AggregateSink, CounterSink, EmitterSink
from textparser.emitters import StreamEmitter, AggregateEmitter

from textparser.parsers import (RegexpParser,
                                ApacheParser,
                                JSONParser,
                                CSVParser,
                                TSVParser,
                                LabeledTSVParser)
from textparser.registry import TemplateRegistry
from textparser.dispatcher import TextParser
