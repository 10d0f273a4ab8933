# View models built from serialized notes
