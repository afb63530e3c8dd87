"""
Praatgrid is a library for reading praat textgrid files.

Praat is a popular tool for working with transcribed speech data.
It has tools for annotating speech, manipulating speech, and extracting
information from speech.
Praat's homepage: [http://www.fon.hum.uva.nl/praat/](http://www.fon.hum.uva.nl/praat/)

praatgrid's utility comes from the classes Textgrid, IntervalTier,
and PointTier in **textgrid.py**. These classes represent the speech transcript
data stored inside of .TextGrid files.  textgrid.py contains functions for
reading these objects from text, files, and file objects; Textgrid.save()
writes them back out.

Both of praat's text encodings are understood, the labelled 'long' form
and the positional 'short' form, and the encoding is detected
automatically.  Files that break the format's rules are rejected with an
exception from **utilities/errors.py** that says what is wrong and where.

For example:

    from praatgrid import textgrid

    tg = textgrid.openTextgrid("mary.TextGrid")
    words = tg.tierByName("word")
    print(words.intervalAt(0.4).label)
"""
